## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class LineError(Exception):
    def __init__(self, message: str = "", *, line_op=None, line_token=None, line_meta=None):
        """Base class for all errors raised by the pipeline."""
        super().__init__(message)
        self.line_op: object = line_op
        self.line_token: str = line_token
        self.line_meta: dict = line_meta or {}

class LineParseError(LineError, ValueError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, line_token=token, line_meta={'filename': filename, 'column': column})
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class LineNameError(LineError, NameError):
    pass

class LineOverflowError(LineError, OverflowError):
    pass

class LineAssertionError(LineError, AssertionError):
    """Internal invariant violations; these indicate a bug, not bad input."""
    pass


class LineStackError(LineError, IndexError):
    """Stack underflow found while executing or validating a program."""
    def __init__(self, message: str = "", *, line_op=None, line_token=None, line_meta=None, line_stack=None):
        super().__init__(message, line_op=line_op, line_token=line_token, line_meta=line_meta)
        self.line_stack = line_stack
