import re


# these are the characters that a regular expression's \s matches in the ASCII range,
# not what the XML specification considers as whitespace
WHITESPACES = ' \t\n\r\f'

_whitespace_run = re.compile('[ \t\n\r\f]+')


# helpers


__all__ = []


def export(func):
    __all__.append(func.__name__)
    return func


# utils


@export
def reduce_whitespaces(text: str, strip: str = 'lr', collapse: bool = True) -> str:
    """ Reduces the whitespaces of the provided string.

        :param text: The input string.
        :param strip: The 'sides' of the string to strip from any whitespace at all,
                      indicated by 'l' for the beginning and/or 'r' for the end of the
                      string.
        :param collapse: Whether any run of consecutive whitespaces shall be replaced
                         with a single space (U+20).
        :returns: The resulting string.
    """
    if 'l' in strip:
        text = text.lstrip(WHITESPACES)
    if 'r' in strip:
        text = text.rstrip(WHITESPACES)
    if collapse:
        text = _whitespace_run.sub(' ', text)
    return text


@export
def normalize_text(text: str, options) -> str:
    """ Returns the form of a text segment that is used to test it for equality
        according to the whitespace options of a :class:`xmlassert.Options` instance.
    """
    strip = ''
    if options.strips_leading_whitespace:
        strip += 'l'
    if options.strips_trailing_whitespace:
        strip += 'r'
    return reduce_whitespaces(text, strip=strip,
                              collapse=options.collapses_whitespace)
