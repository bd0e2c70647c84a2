'''
 The version manifest: the file a launcher reads to know what to download and how to start a
 given version of the game.

 Decoding is strict. Anything the model does not know about is an error instead of being
 dropped, so a change in the upstream format shows up as a failure and not as a launch that
 quietly misses an argument.
'''
import copy
import enum
import json
from collections import namedtuple

from rulesutil import *


class ReleaseType(enum.Enum):
    RELEASE = "release"
    SNAPSHOT = "snapshot"
    OLD_BETA = "old_beta"
    OLD_ALPHA = "old_alpha"


def normalizeValues(raw):
    '''
        "--demo" -> ("--demo",)
        ["--width", "${resolution_width}"] -> ("--width", "${resolution_width}")
    '''
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, list) and raw:
        for index, value in enumerate(raw):
            if not isinstance(value, str):
                raise TypeMismatch('Expected a string, got {0!r}'.format(value), [index])
        return tuple(raw)
    raise TypeMismatch('Expected a string or a non-empty list of strings, got {0!r}'.format(raw))


ConditionalEntry = namedtuple('ConditionalEntry', ['conditions', 'values'])


def decodeRules(raw):
    return wrapList(Rule, raw)


def decodeConditionalEntry(raw):
    if isinstance(raw, str):
        return ConditionalEntry((), (raw,))
    if not isinstance(raw, dict):
        raise TypeMismatch('Expected a string or an object with rules and value, got {0!r}'.format(raw))

    for key in raw:
        if key not in ("rules", "value"):
            raise UnknownField('Unknown field {0!r}, expected one of rules, value'.format(key), key, [key])
    for key in ("rules", "value"):
        if key not in raw:
            raise MissingField('Missing required field {0!r}'.format(key), key, [key])

    with fieldPath("rules"):
        rules = decodeRules(raw["rules"])
    with fieldPath("value"):
        values = normalizeValues(raw["value"])
    return ConditionalEntry(rules, values)


def encodeConditionalEntry(entry):
    if not entry.conditions and len(entry.values) == 1:
        return entry.values[0]
    value = entry.values[0] if len(entry.values) == 1 else list(entry.values)
    return {"rules": [rule.to_json() for rule in entry.conditions], "value": value}


class ArgumentListProperty(JsonProperty):
    '''
        A list mixing bare arguments and {"rules": [...], "value": ...} objects.
    '''

    def wrap(self, value):
        if not isinstance(value, list):
            raise TypeMismatch('Expected a list of arguments, got {0!r}'.format(value))
        entries = []
        for index, raw in enumerate(value):
            with fieldPath(index):
                entries.append(decodeConditionalEntry(raw))
        return tuple(entries)

    def unwrap(self, value):
        value = tuple(value)
        return value, [encodeConditionalEntry(entry) for entry in value]


class Download(StrictObject):
    sha1 = StringProperty(required=True)
    size = UnsignedProperty(required=True)
    url = StringProperty(required=True)


class Artifact(Download):
    path = StringProperty(required=True)


class LibraryDownloads(StrictObject):
    artifact = ObjectProperty(Artifact, exclude_if_none=True, default=None)
    classifiers = MappingProperty(Artifact, exclude_if_none=True, default=None)


class Natives(StrictObject):
    linux = StringProperty(exclude_if_none=True, default=None)
    osx = StringProperty(exclude_if_none=True, default=None)
    windows = StringProperty(exclude_if_none=True, default=None)

    def classifierFor(self, osName):
        if osName not in ("linux", "osx", "windows"):
            return None
        return getattr(self, osName)


class Library(StrictObject):
    name = GradleSpecifierProperty(required=True)
    downloads = ObjectProperty(LibraryDownloads, exclude_if_none=True, default=None)
    extract = PatternMapProperty(exclude_if_none=True, default=None)
    natives = ObjectProperty(Natives, exclude_if_none=True, default=None)
    rules = StrictListProperty(Rule, exclude_if_none=True, default=None)


class Arguments(StrictObject):
    game = ArgumentListProperty(required=True)
    jvm = ArgumentListProperty(required=True)


class AssetIndex(StrictObject):
    id = StringProperty(required=True)
    sha1 = StringProperty(required=True)
    size = UnsignedProperty(required=True)
    totalSize = UnsignedProperty(required=True)
    url = StringProperty(required=True)


class VersionDownloads(StrictObject):
    client = ObjectProperty(Download, required=True)
    client_mappings = ObjectProperty(Download, exclude_if_none=True, default=None)
    server = ObjectProperty(Download, exclude_if_none=True, default=None)
    server_mappings = ObjectProperty(Download, exclude_if_none=True, default=None)
    windows_server = ObjectProperty(Download, exclude_if_none=True, default=None)


class JavaVersion(StrictObject):
    component = StringProperty(required=True)
    majorVersion = UnsignedProperty(required=True)


class LoggingFile(StrictObject):
    id = StringProperty(required=True)
    sha1 = StringProperty(required=True)
    size = UnsignedProperty(required=True)
    url = StringProperty(required=True)


class LoggingDirective(StrictObject):
    argument = StringProperty(required=True)
    file = ObjectProperty(LoggingFile, required=True)
    type = StringProperty(required=True)


class Logging(StrictObject):
    client = ObjectProperty(LoggingDirective, required=True)


class Manifest(StrictObject):
    id = StringProperty(required=True)
    type = EnumProperty(ReleaseType, required=True)
    time = ISOTimestampProperty(required=True)
    releaseTime = ISOTimestampProperty(required=True)
    mainClass = StringProperty(required=True)
    minimumLauncherVersion = UnsignedProperty(required=True)
    complianceLevel = UnsignedProperty(exclude_if_none=True, default=None)
    javaVersion = ObjectProperty(JavaVersion, exclude_if_none=True, default=None)
    assetIndex = ObjectProperty(AssetIndex, required=True)
    assets = StringProperty(required=True)
    downloads = ObjectProperty(VersionDownloads, required=True)
    libraries = StrictListProperty(Library, required=True)
    arguments = ObjectProperty(Arguments, exclude_if_none=True, default=None)
    minecraftArguments = StringProperty(exclude_if_none=True, default=None)
    logging = ObjectProperty(Logging, exclude_if_none=True, default=None)

    def isLegacy(self):
        return self.arguments is None and self.minecraftArguments is not None


class _PairsObject(dict):
    duplicate = None


def _collectPairs(pairs):
    obj = _PairsObject()
    for key, value in pairs:
        if key in obj and obj.duplicate is None:
            obj.duplicate = key
        obj[key] = value
    return obj


def _rejectDuplicates(raw):
    # iterative, the document may be nested deeper than the recursion limit allows
    pending = [(raw, [])]
    while pending:
        value, path = pending.pop()
        if isinstance(value, dict):
            duplicate = getattr(value, 'duplicate', None)
            if duplicate is not None:
                raise DuplicateField('Duplicate field {0!r}'.format(duplicate), duplicate, path + [duplicate])
            pending.extend((item, path + [key]) for key, item in value.items())
        elif isinstance(value, list):
            pending.extend((item, path + [index]) for index, item in enumerate(value))


def parseManifest(raw):
    '''
        Decode an already parsed JSON document. The input is left untouched.
    '''
    if not isinstance(raw, dict):
        raise TypeMismatch('Expected a version manifest object, got {0}'.format(type(raw).__name__))
    try:
        raw = copy.deepcopy(raw)
    except RecursionError:
        raise MalformedInput('Document is nested too deeply')
    return Manifest.wrap(raw)


def loadManifest(text):
    '''
        Decode a JSON document given as str or as bytes (UTF-8, or UTF-16/32 with a BOM).
    '''
    try:
        raw = json.loads(text, object_pairs_hook=_collectPairs)
    except json.JSONDecodeError as e:
        raise MalformedInput('Not a valid JSON document [{0}]'.format(e))
    except UnicodeDecodeError as e:
        raise MalformedInput('Not a valid UTF-8 document [{0}]'.format(e))
    except RecursionError:
        raise MalformedInput('Document is nested too deeply')
    _rejectDuplicates(raw)
    return parseManifest(raw)


def readManifest(path):
    with open(path, 'rb') as f:
        return loadManifest(f.read())
