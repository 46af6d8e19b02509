class XmlAssertException(Exception):
    """ Base class for xmlassert exceptions. """
    pass


class ParseError(XmlAssertException):
    """ Raised when a document isn't well-formed XML. The parser's message is available
        as ``message``.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(XmlAssertException):
    """ Raised when an assertion is used wrongly. This aborts the calling test as it is
        a defect of the test itself rather than a finding about the tested document,
        e.g. a missing or malformed expected document.
    """
