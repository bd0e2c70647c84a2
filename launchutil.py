'''
 Picks the parts of a decoded manifest that apply to one launch.

 Everything here only reads the manifest; order is always kept as it appears in the file,
 because it ends up being the order of the classpath and of the command line.
'''
import logging

from versionutil import *

log = logging.getLogger(__name__)


def selectArguments(entries, context):
    selected = []
    for entry in entries:
        if evaluate(entry.conditions, context):
            selected.extend(entry.values)
        else:
            log.debug("Skipping arguments %r", entry.values)
    return selected


def jvmArguments(manifest, context):
    if manifest.arguments is None:
        return []
    return selectArguments(manifest.arguments.jvm, context)


def gameArguments(manifest, context):
    # legacy versions only have minecraftArguments, splitting it is up to the launcher
    if manifest.arguments is None:
        return []
    return selectArguments(manifest.arguments.game, context)


def libraryApplies(library, context):
    if library.rules is None:
        return True
    return evaluate(library.rules, context)


def selectLibraries(libraries, context):
    selected = []
    for library in libraries:
        if libraryApplies(library, context):
            selected.append(library)
        else:
            log.debug("Skipping library %s", library.name)
    return selected


def nativeClassifier(library, context):
    if library.natives is None:
        return None
    classifier = library.natives.classifierFor(context.osName)
    if classifier is None:
        return None
    bits = "32" if context.osArch == "x86" else "64"
    return classifier.replace("${arch}", bits)


def nativeArtifact(library, context):
    classifier = nativeClassifier(library, context)
    if classifier is None:
        return None
    if library.downloads is None or not library.downloads.classifiers:
        return None
    return library.downloads.classifiers.get(classifier)


def libraryArtifacts(libraries, context):
    '''
        Everything a downloader has to fetch for the libraries that apply to this context:
        each library's main artifact followed by its native bundle, if there is one.
    '''
    artifacts = []
    for library in selectLibraries(libraries, context):
        if library.downloads is not None and library.downloads.artifact is not None:
            artifacts.append(library.downloads.artifact)
        native = nativeArtifact(library, context)
        if native is not None:
            artifacts.append(native)
    return artifacts


def loggingArgument(manifest, path):
    if manifest.logging is None:
        return None
    return manifest.logging.client.argument.replace("${path}", path)
