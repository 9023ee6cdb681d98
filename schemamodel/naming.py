"""Conversions between camel-case and snake-case identifiers."""


def camel_case_to_snake_case(text: str) -> str:
    """Return the snake-case form of a camel-cased string."""
    parts = []
    for position, char in enumerate(text):
        if "A" <= char <= "Z":
            if position > 0:
                parts.append("_")
            parts.append(char.lower())
        else:
            parts.append(char)
    return "".join(parts)


def snake_case_to_camel_case(text: str) -> str:
    """Return the camel-case form of a snake-cased string."""
    words = text.split("_")
    return words[0] + "".join(word[0].upper() + word[1:] for word in words[1:] if word)