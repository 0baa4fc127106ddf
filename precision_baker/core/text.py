import re

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z]*\s*\n(?P<body>[\s\S]*?)\n\s*```\s*$")


def clean_md(text: str) -> str:
    """
    Sanitize markdown artifacts from a single-line value (titles, names).
    Removes:
    - Leading headers (#, ##)
    - Bold markers (**, __)
    - Leading bullets (-, *)
    """
    if not text:
        return ""

    # **text** -> text
    text = re.sub(r"(\*\*|__)(.*?)\1", r"\2", text)

    # # Title -> Title
    text = re.sub(r"^\s*#+\s+", "", text)

    # - Item -> Item
    text = re.sub(r"^\s*[-*]\s+", "", text)

    return text.strip()


def strip_code_fences(text: str) -> str:
    """Unwrap a response the model wrapped in a ```markdown fence."""
    if not text:
        return ""
    match = _FENCE_RE.match(text)
    if match:
        return match.group("body").strip()
    return text.strip()
