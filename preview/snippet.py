ELLIPSIS = "..."

# Character budgets used by the two page variants
HOME_BUDGET = 135
COMPACT_BUDGET = 80


def shorten_text(text: str, budget: int, ellipsis: str = ELLIPSIS) -> str:
    """Cut text to budget characters and mark the cut with an ellipsis.

    Only a single space sitting right at the cut is dropped; any other
    trailing whitespace is kept.
    """
    if budget < 0:
        raise ValueError(f"budget must be >= 0, got {budget}")

    prefix = text[:budget]
    if prefix.endswith(" "):
        prefix = prefix[:-1]
    return prefix + ellipsis
