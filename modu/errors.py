class ModuError(Exception):
    """ Base class for all Modu errors.

    Every error carries the message shown to the user and the source line it
    originated from (0 when no line is known yet).
    """

    def __init__(self, message: str, line: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line

    def at_line(self, line: int) -> "ModuError":
        """Attach a line number if the error does not carry one yet."""
        if not self.line:
            self.line = line
        return self

    def __str__(self):
        return self.message


class ModuLexError(ModuError):
    """ Raised when the tokenizer meets text it does not recognise"""


class ModuInvalidInteger(ModuLexError):
    """ Raised when an integer literal does not fit in 64 bits"""


class ModuSyntaxError(ModuError):
    """ Raised when a token appears where the grammar did not expect it"""


class ModuNameError(ModuError):
    """ Raised when a function, variable, object or property is not bound"""


class ModuArityError(ModuError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class ModuTypeError(ModuError):
    """ Raised when the operands or arguments have the wrong kinds"""


class ModuRecursionError(ModuError):
    """ Raised when a function body or the call stack runs away"""


class ModuImportError(ModuError):
    """ Raised when an import target cannot be read or resolved"""


class ModuRuntimeError(ModuError):
    """ Raised by native functions when the host operation fails"""
