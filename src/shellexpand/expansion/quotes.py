"""Quote removal: the last stage of the pipeline."""


def remove_quotes(text: str) -> str:
    """Drop the backslash from every escaped character.

    "\\{PARAM1\\}" becomes "{PARAM1}" and "\\\\" becomes "\\". A lone
    backslash at the very end has nothing to escape and is kept.
    """
    buf = []
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text):
            buf.append(text[i + 1])
            i += 2
            continue
        buf.append(c)
        i += 1
    return "".join(buf)
