from typing import Callable, Optional

AFFIRMATIVE_ANSWERS = {"y", "yes"}


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def confirm(prompt: str, input_fn: Optional[Callable[[str], str]] = None) -> bool:
    """
    Show prompt and read one line of input.
    Anything other than y/yes (case-insensitive) declines, including EOF
    and Ctrl-C at the prompt.
    """
    if input_fn is None:
        input_fn = input
    try:
        answer = input_fn(prompt)
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return is_affirmative(answer or "")
