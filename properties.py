from jsonobject import *
from jsonobject.base_properties import AbstractDateProperty, JsonProperty
from jsonobject.exceptions import BadValueError
import datetime
import types
import iso8601

from metaerrors import *


class ISOTimestampProperty(AbstractDateProperty):
    _type = datetime.datetime

    def _wrap(self, value):
        try:
            return iso8601.parse_date(value)
        except (ValueError, TypeError) as e:
            raise TypeMismatch(
                'Invalid ISO date/time {0!r} [{1}]'.format(value, e))

    def _unwrap(self, value):
        return value, value.isoformat()


class UnsignedProperty(IntegerProperty):
    '''
        A non-negative integer. Booleans are not integers here, even though python thinks they are.
    '''

    def wrap(self, obj):
        if isinstance(obj, bool) or not isinstance(obj, int):
            raise TypeMismatch('Expected an unsigned integer, got {0!r}'.format(obj))
        if obj < 0:
            raise TypeMismatch('Expected an unsigned integer, got {0!r}'.format(obj))
        return obj


class EnumProperty(JsonProperty):
    '''
        A string restricted to the values of an Enum class, wrapped as the enum member.
    '''

    def __init__(self, enum_type, **kwargs):
        self.enum_type = enum_type
        super().__init__(**kwargs)

    def wrap(self, value):
        if not isinstance(value, str):
            raise TypeMismatch('Expected a string, got {0!r}'.format(value))
        try:
            return self.enum_type(value)
        except ValueError:
            allowed = ', '.join(repr(member.value) for member in self.enum_type)
            raise InvalidEnumValue('{0!r} is not one of {1}'.format(value, allowed))

    def unwrap(self, value):
        if not isinstance(value, self.enum_type):
            value = self.wrap(value)
        return value, value.value


class PatternMapProperty(JsonProperty):
    '''
        A mapping of directive -> list of path patterns, like the 'extract' field of a library:
        {"exclude": ["META-INF/"]}
    '''

    def wrap(self, value):
        if not isinstance(value, dict):
            raise TypeMismatch('Expected an object, got {0!r}'.format(value))
        patterns = {}
        for key, entries in value.items():
            with fieldPath(key):
                if not isinstance(entries, list) or not all(isinstance(entry, str) for entry in entries):
                    raise TypeMismatch('Expected a list of strings, got {0!r}'.format(entries))
                patterns[key] = tuple(entries)
        return types.MappingProxyType(patterns)

    def unwrap(self, value):
        return value, {key: list(entries) for key, entries in value.items()}


class GradleSpecifier:
    '''
        A gradle specifier - a maven coordinate. Like one of these:
        "org.lwjgl.lwjgl:lwjgl:2.9.0"
        "org.lwjgl:lwjgl-glfw:3.3.2:natives-linux"
        "com.mojang:text2speech:1.17.9@zip"
    '''

    def __init__(self, name):
        atSplit = name.split('@')
        if len(atSplit) > 2:
            raise TypeMismatch('Invalid maven coordinate {0!r}'.format(name))

        components = atSplit[0].split(':')
        if len(components) not in (3, 4) or not all(components):
            raise TypeMismatch('Invalid maven coordinate {0!r}'.format(name))

        self.group = components[0]
        self.artifact = components[1]
        self.version = components[2]

        self.extension = 'jar'
        if len(atSplit) == 2:
            self.extension = atSplit[1]

        if len(components) == 4:
            self.classifier = components[3]
        else:
            self.classifier = None

    def toString(self):
        extensionStr = ''
        if self.extension != 'jar':
            extensionStr = "@%s" % self.extension
        if self.classifier:
            return "%s:%s:%s:%s%s" % (self.group, self.artifact, self.version, self.classifier, extensionStr)
        else:
            return "%s:%s:%s%s" % (self.group, self.artifact, self.version, extensionStr)

    def getFilename(self):
        if self.classifier:
            return "%s-%s-%s.%s" % (self.artifact, self.version, self.classifier, self.extension)
        else:
            return "%s-%s.%s" % (self.artifact, self.version, self.extension)

    def getBase(self):
        return "%s/%s/%s/" % (self.group.replace('.', '/'), self.artifact, self.version)

    def getPath(self):
        return self.getBase() + self.getFilename()

    def __repr__(self):
        return "GradleSpecifier('" + self.toString() + "')"

    def __str__(self):
        return self.toString()

    def __eq__(self, other):
        if not isinstance(other, GradleSpecifier):
            return NotImplemented
        return self.toString() == other.toString()

    def __hash__(self):
        return self.toString().__hash__()


class GradleSpecifierProperty(JsonProperty):
    def wrap(self, value):
        if not isinstance(value, str):
            raise TypeMismatch('Expected a maven coordinate string, got {0!r}'.format(value))
        return GradleSpecifier(value)

    def unwrap(self, value):
        if not isinstance(value, GradleSpecifier):
            value = self.wrap(value)
        return value, value.toString()


class StrictObject(JsonObject):
    '''
        A JsonObject that refuses to wrap anything it does not fully understand.

        Unknown keys, missing required keys and values of the wrong shape all raise a ManifestError
        carrying the path to the offending key. Optional properties should be declared with
        default=None and exclude_if_none=True so that absent fields stay absent.
    '''
    _allow_dynamic_properties = False
    _frozen = False

    def __init__(self, _obj=None, **kwargs):
        if _obj is not None:
            self.checkFields(_obj)
        try:
            super().__init__(_obj, **kwargs)
        except BadValueError as e:
            raise TypeMismatch(str(e))
        object.__setattr__(self, '_frozen', True)

    def _refuseChange(self):
        if self._frozen:
            raise TypeError('{0} is read-only once decoded'.format(type(self).__name__))

    def __setattr__(self, name, value):
        if self._frozen:
            raise AttributeError('{0} is read-only, cannot set {1!r}'.format(type(self).__name__, name))
        super().__setattr__(name, value)

    def __delattr__(self, name):
        if self._frozen:
            raise AttributeError('{0} is read-only, cannot delete {1!r}'.format(type(self).__name__, name))
        super().__delattr__(name)

    def __setitem__(self, key, value):
        self._refuseChange()
        super().__setitem__(key, value)

    def __delitem__(self, key):
        self._refuseChange()
        super().__delitem__(key)

    def update(self, *args, **kwargs):
        self._refuseChange()
        super().update(*args, **kwargs)

    def setdefault(self, key, default=None):
        self._refuseChange()
        return super().setdefault(key, default)

    def pop(self, key, *args):
        self._refuseChange()
        return super().pop(key, *args)

    def popitem(self):
        self._refuseChange()
        return super().popitem()

    def clear(self):
        self._refuseChange()
        super().clear()

    @classmethod
    def checkFields(cls, obj):
        if not isinstance(obj, dict):
            raise TypeMismatch('Expected an object, got {0!r}'.format(obj))
        known = cls._properties_by_key
        for key in obj:
            if key not in known:
                raise UnknownField(
                    'Unknown field {0!r}, expected one of {1}'.format(key, ', '.join(sorted(known))),
                    key, [key])
        for key, prop in known.items():
            if prop.required and obj.get(key) is None:
                raise MissingField('Missing required field {0!r}'.format(key), key, [key])

    def set_raw_value(self, key, value):
        with fieldPath(key):
            try:
                super().set_raw_value(key, value)
            except BadValueError as e:
                raise TypeMismatch(str(e))

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.to_json() == other.to_json()

    __hash__ = None


def wrapList(item_type, value):
    if not isinstance(value, list):
        raise TypeMismatch('Expected a list, got {0!r}'.format(value))
    items = []
    for index, raw in enumerate(value):
        with fieldPath(index):
            items.append(item_type.wrap(raw))
    return tuple(items)


class StrictListProperty(JsonProperty):
    '''
        A list of StrictObjects, wrapped as a tuple. Errors in an item carry the item's index.
    '''

    def __init__(self, item_type, **kwargs):
        self.item_type = item_type
        super().__init__(**kwargs)

    def wrap(self, value):
        return wrapList(self.item_type, value)

    def unwrap(self, value):
        value = tuple(value)
        return value, [item.to_json() for item in value]


class MappingProperty(JsonProperty):
    '''
        An object of name -> item, wrapped as a read-only mapping. item_type is either a
        StrictObject class or a plain JSON type such as bool.
        Errors in an item carry the item's key.
    '''

    def __init__(self, item_type, **kwargs):
        self.item_type = item_type
        super().__init__(**kwargs)

    def wrapItem(self, raw):
        if issubclass(self.item_type, StrictObject):
            return self.item_type.wrap(raw)
        if type(raw) is not self.item_type:
            raise TypeMismatch('Expected {0}, got {1!r}'.format(self.item_type.__name__, raw))
        return raw

    def wrap(self, value):
        if not isinstance(value, dict):
            raise TypeMismatch('Expected an object, got {0!r}'.format(value))
        items = {}
        for key, raw in value.items():
            with fieldPath(key):
                items[key] = self.wrapItem(raw)
        return types.MappingProxyType(items)

    def unwrap(self, value):
        unwrapped = {}
        for key, item in value.items():
            unwrapped[key] = item.to_json() if isinstance(item, StrictObject) else item
        return value, unwrapped
