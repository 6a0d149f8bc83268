from typing import Optional, Sequence

from innerpeace.memory.schemas import UserProfile

SYSTEM_PROMPT = """You are InnerPeace AI, a compassionate and empathetic mental health support assistant. Your role is to:

1. Provide emotional support and validation
2. Guide users through evidence-based CBT (Cognitive Behavioral Therapy) and DBT (Dialectical Behavior Therapy) exercises
3. Help users identify thought patterns and cognitive distortions
4. Teach coping strategies and mindfulness techniques
5. Encourage professional help when appropriate

IMPORTANT GUIDELINES:
- Always be warm, non-judgmental, and supportive
- Use active listening techniques (reflect feelings, ask clarifying questions)
- Never diagnose or replace professional mental health care
- If someone expresses suicidal thoughts or self-harm, provide crisis resources immediately
- Keep responses concise but meaningful
- Offer specific exercises when appropriate

CBT Techniques you can guide:
- Thought Records (identifying automatic thoughts)
- Cognitive Restructuring (challenging negative thoughts)
- Behavioral Activation (activity scheduling)
- Problem-Solving

DBT Skills you can teach:
- Mindfulness (observe, describe, participate)
- Distress Tolerance (TIPP, STOP, self-soothe)
- Emotion Regulation (opposite action, checking the facts)
- Interpersonal Effectiveness (DEAR MAN, GIVE, FAST)

Always end crisis situations with: "If you're in crisis, please contact the 988 Suicide & Crisis Lifeline by calling or texting 988."
"""

ACKNOWLEDGEMENT = "I understand. I am InnerPeace AI, ready to provide compassionate mental health support using CBT and DBT techniques. How can I help you today?"

SENTIMENT_PROMPT = """Analyze the emotional content of this journal entry and provide a JSON response with:
1. "score": a number from -1 (very negative) to 1 (very positive)
2. "label": one of "Very Negative", "Negative", "Neutral", "Positive", "Very Positive"
3. "insights": an array of 2-3 brief insights about emotional patterns or thoughts expressed

Journal entry: "{text}"

Respond ONLY with valid JSON, no additional text."""

CBT_PROMPT = """{system}
Based on the user's concern: "{concern}"

Generate a personalized CBT (Cognitive Behavioral Therapy) exercise. Include:
1. A brief explanation of why this exercise might help
2. Step-by-step instructions (numbered list)
3. An example of how to apply it to their situation
4. A reflection prompt to use afterward

Keep the response warm, supportive, and actionable."""

DBT_PROMPT = """{system}
Based on the user's situation: "{situation}"

Recommend and teach a DBT (Dialectical Behavior Therapy) skill that would be helpful. Include:
1. The skill name and which DBT module it belongs to (Mindfulness, Distress Tolerance, Emotion Regulation, or Interpersonal Effectiveness)
2. Why this skill is relevant to their situation
3. Step-by-step instructions to practice the skill
4. Tips for making it more effective

Keep the response compassionate and practical."""


def build_profile_context(profile: Optional[UserProfile]) -> str:
    if profile is None:
        return ""

    facts = []
    if profile.age:
        facts.append(f"- Age: {profile.age}")
    if profile.gender:
        facts.append(f"- Gender: {profile.gender}")
    if profile.relationship_status:
        facts.append(f"- Relationship status: {profile.relationship_status}")
    if profile.occupation:
        facts.append(f"- Occupation: {profile.occupation}")
    if profile.current_mood:
        facts.append(f"- Recent mood: {profile.current_mood}")
    if profile.medical_history:
        facts.append(f"- Relevant history: {profile.medical_history}")
    if profile.physical_activities:
        facts.append(f"- Physical activities: {', '.join(profile.physical_activities)}")
    if profile.mental_activities:
        facts.append(f"- Mental activities: {', '.join(profile.mental_activities)}")

    if not facts:
        return ""
    return "\nAbout the person you are supporting (tailor your guidance to them):\n" + "\n".join(facts) + "\n"


def build_chat_contents(
    message: str,
    history: Sequence[dict] = (),
    profile: Optional[UserProfile] = None,
) -> list[dict]:
    """Turn a transcript into the oracle's role-tagged `contents` array."""
    instruction = SYSTEM_PROMPT + build_profile_context(profile)
    contents = [
        {"role": "user", "parts": [{"text": f"Instructions for you: {instruction}\nNow respond to the user's messages."}]},
        {"role": "model", "parts": [{"text": ACKNOWLEDGEMENT}]},
    ]
    for turn in history:
        role = "user" if turn.get("role") == "user" else "model"
        contents.append({"role": role, "parts": [{"text": turn.get("content", "")}]})
    contents.append({"role": "user", "parts": [{"text": message}]})
    return contents


def build_single_prompt(prompt: str) -> list[dict]:
    return [{"parts": [{"text": prompt}]}]


def build_sentiment_prompt(text: str) -> str:
    return SENTIMENT_PROMPT.format(text=text)


def build_cbt_prompt(concern: str) -> str:
    return CBT_PROMPT.format(system=SYSTEM_PROMPT, concern=concern)


def build_dbt_prompt(situation: str) -> str:
    return DBT_PROMPT.format(system=SYSTEM_PROMPT, situation=situation)
