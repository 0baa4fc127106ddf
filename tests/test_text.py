from precision_baker.core.text import clean_md, strip_code_fences


def test_clean_md():
    assert clean_md("## **Lemon Bars**") == "Lemon Bars"
    assert clean_md("- flour") == "flour"
    assert clean_md("") == ""


def test_strip_code_fences():
    assert strip_code_fences("```markdown\n# Title\nbody\n```") == "# Title\nbody"
    assert strip_code_fences("```\nplain\n```\n") == "plain"
    assert strip_code_fences("  # No fence  ") == "# No fence"
    assert strip_code_fences(None) == ""
