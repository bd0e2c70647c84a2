'''
 Errors raised while decoding version manifests.

 Every error keeps the path (wire keys and list indices) leading to the
 offending value, so a caller can report exactly what is wrong with a file.
'''
from contextlib import contextmanager


class ManifestError(ValueError):
    def __init__(self, message, path=None):
        super().__init__(message)
        self.message = message
        self.path = list(path or [])

    def pathString(self):
        out = ''
        for part in self.path:
            if isinstance(part, int):
                out += '[%d]' % part
            elif out:
                out += '.' + part
            else:
                out = part
        return out

    def __str__(self):
        if not self.path:
            return self.message
        return '%s: %s' % (self.pathString(), self.message)


class MalformedInput(ManifestError):
    pass


class TypeMismatch(ManifestError):
    pass


class FieldError(ManifestError):
    def __init__(self, message, field, path=None):
        super().__init__(message, path)
        self.field = field


class MissingField(FieldError):
    pass


class DuplicateField(FieldError):
    pass


class UnknownField(FieldError):
    pass


class InvalidEnumValue(ManifestError):
    pass


@contextmanager
def fieldPath(part):
    '''
     Prefix the path of any ManifestError escaping the block with `part`.
    '''
    try:
        yield
    except ManifestError as e:
        e.path.insert(0, part)
        raise
