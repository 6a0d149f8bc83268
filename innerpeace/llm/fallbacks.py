"""Deterministic stand-ins for the oracle, used offline and in demo mode."""

import re

from innerpeace.memory.schemas import SentimentAnalysis

POSITIVE_WORDS = ["happy", "good", "great", "wonderful", "excited", "grateful", "love", "joy"]
NEGATIVE_WORDS = ["sad", "angry", "frustrated", "anxious", "worried", "stressed", "tired", "hurt"]

FALLBACK_INSIGHTS = [
    "Your entry shows self-reflection and emotional awareness.",
    "Consider exploring the emotions mentioned through journaling.",
    "Remember that all emotions are valid and temporary.",
]

GREETING = re.compile(r"\b(hello|hi|hey)\b")


def band_sentiment(score: float) -> str:
    if score > 0.5:
        return "Very Positive"
    if score > 0.2:
        return "Positive"
    if score < -0.5:
        return "Very Negative"
    if score < -0.2:
        return "Negative"
    return "Neutral"


def lexical_sentiment(text: str) -> SentimentAnalysis:
    lowered = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)

    score = (positive - negative) / max(positive + negative, 1)
    score = max(-1.0, min(1.0, score * 0.8))

    return SentimentAnalysis(
        score=score,
        label=band_sentiment(score),
        insights=list(FALLBACK_INSIGHTS),
    )


ANXIETY_RESPONSE = """I hear that you're feeling anxious, and I want you to know that's completely valid. Anxiety is our mind's way of trying to protect us, even when it can feel overwhelming.

Let me guide you through a quick grounding exercise called the 5-4-3-2-1 technique:

**5-4-3-2-1 Grounding Exercise:**
1. **5 things you can SEE** - Look around and name 5 things you can see right now
2. **4 things you can TOUCH** - Notice 4 things you can physically feel (your feet on the floor, the chair supporting you)
3. **3 things you can HEAR** - Listen for 3 sounds around you
4. **2 things you can SMELL** - Notice 2 scents in your environment
5. **1 thing you can TASTE** - Focus on one taste in your mouth

This helps bring your attention back to the present moment. Would you like to try it together, or would you prefer to talk more about what's causing your anxiety?"""

SADNESS_RESPONSE = """Thank you for sharing how you're feeling. It takes courage to acknowledge when we're feeling down. Your feelings are valid, and you don't have to face this alone.

When we're feeling sad, our minds can get caught in negative thought patterns. Let me share a CBT technique called "Thought Challenging":

**Thought Challenging Exercise:**
1. **Identify the thought**: What negative thought is running through your mind right now?
2. **Examine the evidence**: What facts support this thought? What facts contradict it?
3. **Alternative perspective**: How might a caring friend view this situation?
4. **Balanced thought**: Can you create a more balanced version of the original thought?

Would you like to work through this together? You can share a specific thought, and I'll help you examine it gently.

Remember: sadness is a natural emotion, and reaching out for support shows strength."""

STRESS_RESPONSE = """I can sense that you're feeling overwhelmed, and I want you to know that it's okay to feel this way. Life can pile up sometimes, and it's natural to feel stressed.

Let me teach you the **STOP** skill from DBT (Dialectical Behavior Therapy):

**S - Stop**: Pause what you're doing. Don't react immediately.
**T - Take a breath**: Take one slow, deep breath. Feel your feet on the ground.
**O - Observe**: Notice what's happening inside you (thoughts, feelings, body sensations) and around you.
**P - Proceed mindfully**: Ask yourself "What's the most helpful thing I can do right now?"

This simple technique can help create space between stimulus and response, giving you back a sense of control.

Would you like to tell me more about what's overwhelming you? Sometimes breaking things down into smaller pieces can make them feel more manageable."""

ANGER_RESPONSE = """I can hear that you're feeling frustrated or angry right now. Those are powerful emotions, and it's important to acknowledge them rather than push them away.

Let me share a technique called **RAIN** that can help you work through difficult emotions:

**R - Recognize**: Notice and name what you're feeling. "I am feeling angry."
**A - Allow**: Let the feeling be there without trying to fix or change it immediately.
**I - Investigate**: With curiosity, explore where you feel it in your body. What triggered it?
**N - Nurture**: Offer yourself compassion. What would you say to a friend feeling this way?

Anger often tells us something important. Maybe a boundary was crossed, or a need isn't being met.

Would you like to explore what might be underneath your anger? I'm here to listen."""

SLEEP_RESPONSE = """Sleep difficulties can be really challenging, and I appreciate you sharing this with me. Poor sleep affects our mood, our thoughts, and our ability to cope.

Here's a **Sleep Hygiene** checklist that many people find helpful:

**Before Bed:**
- Put away screens 30-60 minutes before sleep
- Keep your room cool, dark, and quiet
- Avoid caffeine after 2pm
- Create a relaxing routine (reading, gentle stretching, warm bath)

**If You Can't Sleep:**
- Don't watch the clock; turn it away from you
- If you're awake for more than 20 minutes, get up and do something calm
- Try a body scan meditation: focus on relaxing each part of your body
- Practice 4-7-8 breathing: inhale for 4, hold for 7, exhale for 8

What aspect of sleep is most challenging for you? Is it falling asleep, staying asleep, or waking up too early?"""

GREETING_RESPONSE = """Hello! It's good to connect with you.

I'm InnerPeace AI, and I'm here to support you with whatever's on your mind. Whether you want to:

- **Talk through difficult feelings** - I'm here to listen
- **Learn coping techniques** - I can guide you through CBT and DBT exercises
- **Practice mindfulness** - We can do grounding exercises together
- **Just vent** - Sometimes we just need someone to hear us

How are you feeling today? What brings you here?"""

REFLECTIVE_RESPONSE = """Thank you for sharing with me. I'm here to listen and support you.

I noticed you mentioned "{excerpt}"

Can you tell me more about what's on your mind? The more you share, the better I can help guide you to exercises and techniques that might be helpful.

Some things we could explore together:
- **Thought patterns** - Are there recurring thoughts that bother you?
- **Emotions** - How would you describe what you're feeling right now?
- **Situations** - Is there a specific situation that triggered these feelings?
- **Coping strategies** - What has helped you in the past?

I'm here to listen without judgment."""

# Checked in order; first match wins.
KEYWORD_RESPONSES = [
    (("anxious", "anxiety", "worried"), ANXIETY_RESPONSE),
    (("sad", "depressed", "down"), SADNESS_RESPONSE),
    (("stress", "overwhelmed"), STRESS_RESPONSE),
    (("angry", "mad", "frustrated"), ANGER_RESPONSE),
    (("sleep", "insomnia", "tired"), SLEEP_RESPONSE),
]


def canned_chat_response(message: str) -> str:
    lowered = message.lower()
    for keywords, response in KEYWORD_RESPONSES:
        if any(keyword in lowered for keyword in keywords):
            return response
    if GREETING.search(lowered):
        return GREETING_RESPONSE

    excerpt = message[:50] + ("..." if len(message) > 50 else "")
    return REFLECTIVE_RESPONSE.format(excerpt=excerpt)


def canned_cbt_exercise(concern: str) -> str:
    return f"""Based on your concern, I'd like to guide you through a **Thought Record** exercise:

**Why This Helps:**
Thought records help us identify and examine our automatic thoughts, which are often the root of emotional distress. By writing them down, we can view them more objectively.

**Step-by-Step Instructions:**

1. **Situation**: Briefly describe what happened.
   *Example: "{concern}"*

2. **Emotions**: What emotions did you feel? Rate their intensity (0-100%).

3. **Automatic Thoughts**: What thoughts went through your mind? What did you tell yourself?

4. **Evidence For**: What facts support this thought?

5. **Evidence Against**: What facts contradict this thought?

6. **Balanced Thought**: Based on the evidence, what's a more balanced way to think about this?

7. **Re-rate Emotions**: How intense are your emotions now?

**Reflection Prompt:**
After completing this exercise, ask yourself: "What did I learn about my thinking patterns? How might I respond differently next time?"

Take your time with each step. There's no rush."""


DBT_TIPP_SKILL = """For your situation, I recommend the **TIPP** skill from DBT's Distress Tolerance module.

**Why TIPP is Relevant:**
When we're in emotional distress, our body's fight-or-flight response can make it hard to think clearly. TIPP quickly changes your body chemistry to help regulate intense emotions.

**T - Temperature**
- Splash cold water on your face or hold an ice cube
- This activates the "dive reflex" and slows your heart rate

**I - Intense Exercise**
- Do jumping jacks, run in place, or take a brisk walk
- Just 10-20 minutes releases endorphins

**P - Paced Breathing**
- Breathe out longer than you breathe in
- Try: inhale for 4 counts, exhale for 6-8 counts

**P - Progressive Muscle Relaxation**
- Tense each muscle group for 5 seconds, then release
- Start with your toes and work up to your face

**Tips for Success:**
- Start with whichever step feels most accessible
- You don't need to do all four; even one can help
- Practice when you're calm so it's easier when distressed
- Be patient with yourself"""


def canned_dbt_skill(situation: str) -> str:
    return DBT_TIPP_SKILL
