"""Suggested tags offered next to each tag-set editor."""

CHIP_SUGGESTIONS: dict[str, list[str]] = {
    "tone_traits": [
        "Confident",
        "Empathetic",
        "Plainspoken",
        "Playful",
        "Authoritative",
        "Curious",
    ],
    "style_guidelines": [
        "Use numbered steps",
        "Lead with the answer",
        "Use tables for comparisons",
        "Cite sources inline",
        "Avoid jargon",
    ],
    "constraints": [
        "Stay under 500 words",
        "No speculation",
        "Ask before assuming missing inputs",
        "Use only provided sources",
    ],
    "keywords": [
        "first principles",
        "trade-offs",
        "acceptance criteria",
        "risk register",
    ],
}
