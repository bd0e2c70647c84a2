import pytest

from launchutil import *


@pytest.fixture
def modern(modern_raw):
    return parseManifest(modern_raw)


@pytest.fixture
def legacy(legacy_raw):
    return parseManifest(legacy_raw)


def entries(*raw):
    return [decodeConditionalEntry(entry) for entry in raw]


def test_select_keeps_order_and_skips_excluded():
    arguments = entries(
        "--a",
        {"rules": [{"action": "allow", "os": {"name": "osx"}}], "value": ["--b", "2"]},
        {"rules": [{"action": "allow", "os": {"name": "linux"}}], "value": ["--c", "3"]},
        "--d",
    )
    assert selectArguments(arguments, Context("linux")) == ["--a", "--c", "3", "--d"]
    assert selectArguments(arguments, Context("osx")) == ["--a", "--b", "2", "--d"]


def test_select_does_not_deduplicate():
    arguments = entries("-cp", "-cp")
    assert selectArguments(arguments, Context("linux")) == ["-cp", "-cp"]


def test_game_arguments_with_features(modern):
    plain = gameArguments(modern, Context("linux"))
    assert plain == ["--username", "${auth_player_name}", "--version", "${version_name}"]

    context = Context("linux", features=["is_demo_user", "has_custom_resolution"])
    assert gameArguments(modern, context) == plain + [
        "--demo",
        "--width", "${resolution_width}", "--height", "${resolution_height}",
    ]


def test_jvm_arguments_per_platform(modern):
    tail = ["-Djava.library.path=${natives_directory}", "-cp", "${classpath}"]
    assert jvmArguments(modern, Context("linux", "x86_64")) == tail
    assert jvmArguments(modern, Context("osx", "arm64")) == ["-XstartOnFirstThread"] + tail
    assert jvmArguments(modern, Context("windows", "x86")) == [
        "-XX:HeapDumpPath=MojangTricksIntelDriversForPerformance_javaw.exe_minecraft.exe.heapdump",
        "-Xss1M",
    ] + tail


def test_legacy_has_no_structured_arguments(legacy):
    assert jvmArguments(legacy, Context("linux")) == []
    assert gameArguments(legacy, Context("linux")) == []


def test_select_libraries_by_os(modern):
    names = [library.name.toString() for library in selectLibraries(modern.libraries, Context("linux"))]
    assert names == [
        "org.joml:joml:1.10.5",
        "org.lwjgl:lwjgl-glfw:3.3.2",
        "org.lwjgl:lwjgl-glfw:3.3.2:natives-linux",
    ]


def test_osx_only_library_is_excluded_on_linux():
    library = Library.wrap({
        "name": "ca.weblite:java-objc-bridge:1.0.0",
        "rules": [{"action": "allow", "os": {"name": "osx"}}],
    })
    assert selectLibraries([library], Context("linux")) == []
    assert selectLibraries([library], Context("osx")) == [library]


def test_legacy_libraries(legacy):
    def names(context):
        return [library.name.artifact for library in selectLibraries(legacy.libraries, context)]

    assert names(Context("linux")) == ["twitch", "lwjgl", "lwjgl-platform"]
    assert names(Context("osx")) == ["twitch", "java-objc-bridge", "twitch-platform"]
    assert names(Context("windows")) == ["twitch", "lwjgl", "lwjgl-platform", "twitch-platform"]


def test_native_classifier(legacy):
    platform = legacy.libraries[3]
    assert nativeClassifier(platform, Context("linux")) == "natives-linux"
    assert nativeClassifier(platform, Context("solaris")) is None
    assert nativeClassifier(legacy.libraries[0], Context("linux")) is None


def test_native_classifier_arch(legacy):
    twitch = legacy.libraries[4]
    assert nativeClassifier(twitch, Context("windows", "x86")) == "natives-windows-32"
    assert nativeClassifier(twitch, Context("windows", "x86_64")) == "natives-windows-64"
    assert nativeClassifier(twitch, Context("osx", "x86_64")) is None


def test_native_artifact(legacy):
    platform = legacy.libraries[3]
    artifact = nativeArtifact(platform, Context("windows", "x86_64"))
    assert artifact.path.endswith("-natives-windows.jar")
    twitch = legacy.libraries[4]
    assert nativeArtifact(twitch, Context("windows", "x86")).size == 474225
    assert nativeArtifact(twitch, Context("linux")) is None


def test_library_artifacts(legacy):
    paths = [artifact.path for artifact in libraryArtifacts(legacy.libraries, Context("windows", "x86_64"))]
    assert paths == [
        "tv/twitch/twitch/6.5/twitch-6.5.jar",
        "org/lwjgl/lwjgl/lwjgl/2.9.4-nightly-20150209/lwjgl-2.9.4-nightly-20150209.jar",
        "org/lwjgl/lwjgl/lwjgl-platform/2.9.4-nightly-20150209/lwjgl-platform-2.9.4-nightly-20150209-natives-windows.jar",
        "tv/twitch/twitch-platform/6.5/twitch-platform-6.5.jar",
        "tv/twitch/twitch-platform/6.5/twitch-platform-6.5-natives-windows-64.jar",
    ]


def test_logging_argument(modern):
    assert loggingArgument(modern, "/tmp/client-1.12.xml") == "-Dlog4j.configurationFile=/tmp/client-1.12.xml"


def test_logging_argument_without_logging(modern_raw):
    del modern_raw["logging"]
    assert loggingArgument(parseManifest(modern_raw), "/tmp/x.xml") is None


def test_selection_does_not_change_manifest(modern):
    before = modern.to_json()
    selectLibraries(modern.libraries, Context("linux"))
    jvmArguments(modern, Context("osx", features=["is_demo_user"]))
    assert modern.to_json() == before
