'''
 Rules decide whether a library or an argument applies to the machine a version is launched on.

 A rule list is evaluated in order. With no rules at all, the element is always included.
 Otherwise the verdict starts as 'disallow' and every rule whose criteria match the context
 replaces it with its own action, so the last matching rule wins.
'''
import enum
import logging
import platform
import re
from collections import namedtuple

from properties import *

log = logging.getLogger(__name__)


class RuleAction(enum.Enum):
    ALLOW = "allow"
    DISALLOW = "disallow"

    @classmethod
    def _missing_(cls, value):
        # some third party manifests spell it 'deny'
        if value == "deny":
            return cls.DISALLOW
        return None


class OSRule(StrictObject):
    name = StringProperty(exclude_if_none=True, default=None)
    arch = StringProperty(exclude_if_none=True, default=None)
    version = StringProperty(exclude_if_none=True, default=None)

    def matches(self, context):
        if self.name is not None and self.name != context.osName:
            return False
        if self.arch is not None and self.arch != context.osArch:
            return False
        if self.version is not None:
            if context.osVersion is None:
                return False
            try:
                return re.search(self.version, context.osVersion) is not None
            except re.error:
                log.debug("Ignoring rule with bad OS version pattern %r", self.version)
                return False
        return True


class Rule(StrictObject):
    action = EnumProperty(RuleAction, required=True)
    os = ObjectProperty(OSRule, exclude_if_none=True, default=None)
    features = MappingProperty(bool, exclude_if_none=True, default=None)

    def allows(self):
        return self.action == RuleAction.ALLOW


class Context(namedtuple('Context', ['osName', 'osArch', 'osVersion', 'features'])):
    '''
        The machine and launch settings rules are evaluated against.

        osName is one of the names rules use ("linux", "osx", "windows"), osArch is "x86" for
        32 bit intel and "x86_64" / "arm64" otherwise. features holds the names of the enabled
        feature flags, like "is_demo_user" or "has_custom_resolution".
    '''
    __slots__ = ()

    def __new__(cls, osName, osArch=None, osVersion=None, features=()):
        if isinstance(features, str):
            features = (features,)
        return super().__new__(cls, osName, osArch, osVersion, frozenset(features))

    def hasFeature(self, name):
        return name in self.features


def hostOSName(system=None):
    system = system or platform.system()
    if system == "Darwin":
        return "osx"
    if system == "Windows":
        return "windows"
    return "linux"


def hostArch(machine=None):
    machine = (machine or platform.machine()).lower()
    if machine in ("i386", "i486", "i586", "i686", "x86"):
        return "x86"
    if machine in ("arm64", "aarch64", "armv8l"):
        return "arm64"
    if machine in ("amd64", "x86_64", "x64"):
        return "x86_64"
    return machine


def hostContext(features=()):
    osName = hostOSName()
    if osName == "osx":
        osVersion = platform.mac_ver()[0] or platform.release()
    elif osName == "windows":
        osVersion = platform.version()
    else:
        osVersion = platform.release()
    return Context(osName, hostArch(), osVersion, features)


def ruleMatches(rule, context):
    if rule.os is not None and not rule.os.matches(context):
        return False
    if rule.features:
        for name, wanted in rule.features.items():
            if context.hasFeature(name) != wanted:
                return False
    return True


def evaluate(rules, context):
    if not rules:
        return True
    allowed = False
    for rule in rules:
        if ruleMatches(rule, context):
            allowed = rule.allows()
    return allowed
