"""Prompt templates for argument generation and judging."""

from .models import TranscriptEntry


ARGUMENT_SYSTEM_PROMPT = """You are {persona_name}, an AI debate participant with the following characteristics:
Tone: {persona_tone}
Ideological Bias: {persona_bias}

You are debating the topic: "{topic}"

Your goal is to make a compelling argument that reflects your tone and bias. Be persuasive, articulate, and engage with previous arguments when relevant. Keep your response focused and under 200 words."""

ARGUMENT_USER_PROMPT = "This is round {round_number}. Present your argument for this debate.{history}"

JUDGE_SYSTEM_PROMPT = """You are an expert debate judge with deep knowledge of rhetoric, logic, and persuasive argumentation. You evaluate debates objectively based on:
- Strength and clarity of arguments
- Use of evidence and logical reasoning
- Engagement with opposing viewpoints
- Consistency and coherence
- Persuasiveness and impact

Your role is to analyze the complete debate and declare a winner with detailed reasoning."""

JUDGE_USER_PROMPT = """Please judge this debate on the topic: "{topic}"

**Debaters:**
- {persona_a_name}
- {persona_b_name}

**Full Debate Transcript:**
{transcript}

Analyze both sides carefully and provide:
1. A clear declaration of the winner ({persona_a_name} or {persona_b_name})
2. A detailed summary (3-5 paragraphs) explaining your reasoning, highlighting key strengths and weaknesses of each debater

Format your response as:
WINNER: [Name]
JUDGMENT: [Your detailed analysis]"""


def format_history(prior_argument_lines: list[str]) -> str:
    """Format earlier arguments for inclusion in the user message."""
    if not prior_argument_lines:
        return ""
    return "\n\nPrevious arguments in this debate:\n" + "\n\n".join(prior_argument_lines)


def format_transcript(transcript: list[TranscriptEntry]) -> str:
    return "\n\n".join(
        f"**Round {entry.round_number} - {entry.persona_name}:**\n{entry.content}"
        for entry in transcript
    )


def build_argument_prompts(
    topic: str,
    persona_name: str,
    persona_tone: str,
    persona_bias: str,
    prior_argument_lines: list[str],
    round_number: int,
) -> tuple[str, str]:
    """Return (system, user) prompts for one argument."""
    system = ARGUMENT_SYSTEM_PROMPT.format(
        persona_name=persona_name,
        persona_tone=persona_tone,
        persona_bias=persona_bias,
        topic=topic,
    )
    user = ARGUMENT_USER_PROMPT.format(
        round_number=round_number,
        history=format_history(prior_argument_lines),
    )
    return system, user


def build_judge_prompts(
    topic: str,
    persona_a_name: str,
    persona_b_name: str,
    transcript: list[TranscriptEntry],
) -> tuple[str, str]:
    """Return (system, user) prompts for judging."""
    user = JUDGE_USER_PROMPT.format(
        topic=topic,
        persona_a_name=persona_a_name,
        persona_b_name=persona_b_name,
        transcript=format_transcript(transcript),
    )
    return JUDGE_SYSTEM_PROMPT, user
