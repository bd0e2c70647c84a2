#!/usr/bin/python3
'''
 Show what a version manifest resolves to on a given platform:
 the libraries that apply, the files to fetch and the JVM and game arguments.
'''
import argparse
import sys

from launchutil import *


def eprint(*args, **kwargs):
    print(*args, file=sys.stderr, **kwargs)


def buildContext(args):
    host = hostContext(args.feature)
    osName = args.os or host.osName
    osVersion = args.os_version
    # the host version says nothing about another OS
    if osVersion is None and osName == host.osName:
        osVersion = host.osVersion
    return Context(osName, args.arch or host.osArch, osVersion, args.feature)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Resolve a version manifest for one platform")
    parser.add_argument("manifest", help="path to the version JSON file")
    parser.add_argument("--os", choices=["linux", "osx", "windows"], help="OS name, defaults to this machine")
    parser.add_argument("--arch", help="architecture (x86, x86_64, arm64), defaults to this machine")
    parser.add_argument("--os-version", help="OS version string rules are matched against")
    parser.add_argument("--feature", action="append", default=[], help="enable a feature flag, can be repeated")
    args = parser.parse_args(argv)

    try:
        manifest = readManifest(args.manifest)
    except ManifestError as e:
        eprint("%s: %s" % (args.manifest, e))
        return 1

    context = buildContext(args)
    print("%s (%s) on %s/%s" % (manifest.id, manifest.type.value, context.osName, context.osArch))

    print("")
    print("Libraries:")
    for library in selectLibraries(manifest.libraries, context):
        print("  " + library.name.toString())

    print("")
    print("Downloads:")
    for artifact in libraryArtifacts(manifest.libraries, context):
        print("  %s (%d bytes)" % (artifact.path, artifact.size))

    print("")
    print("JVM arguments:")
    for argument in jvmArguments(manifest, context):
        print("  " + argument)

    print("")
    print("Game arguments:")
    if manifest.isLegacy():
        print("  " + manifest.minecraftArguments)
    for argument in gameArguments(manifest, context):
        print("  " + argument)
    return 0


if __name__ == '__main__':
    sys.exit(main())
