from typing import List


def split_long_word(word: str, max_line_length: int) -> List[str]:
    """Hard-split a word into consecutive chunks of at most max_line_length chars"""
    return [word[i:i + max_line_length] for i in range(0, len(word), max_line_length)]


def wrap(text: str, max_line_length: int = 20) -> List[str]:
    """
    Greedy word wrap under a character budget.

    Words are packed left to right; a word longer than the budget is cut into
    fixed-size chunks, each becoming its own line.
    """
    if max_line_length < 1:
        raise ValueError(f"max_line_length must be positive, got {max_line_length}")

    words = text.split(" ")
    lines = []
    current_line = []
    current_length = 0

    for word in words:
        # Length of the accumulator once this word (and its separator) is added
        new_length = current_length + len(word) + (1 if current_line else 0)

        if new_length > max_line_length or len(word) > max_line_length:
            if current_line:
                lines.append(" ".join(current_line))
                current_line = []
                current_length = 0

            if len(word) > max_line_length:
                lines.extend(split_long_word(word, max_line_length))
            else:
                current_line = [word]
                current_length = len(word)
        else:
            current_line.append(word)
            current_length = new_length

    # Don't forget the last line
    if current_line:
        lines.append(" ".join(current_line))

    return lines
