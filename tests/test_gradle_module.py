import pytest

import gradle_module
from conftest import make_module
from gradle_module import (
    extract_package_name,
    find_build_file,
    has_test_dependencies,
    module_root,
)
from utgen_config import GeneratorConfig
from utgen_errors import ConfigResolutionError


class TestPackageResolver:

    def test_kotlin_source_root(self):
        assert extract_package_name("proj/app/src/main/kotlin/a/b/C.kt") == "a.b"

    def test_java_source_root(self):
        assert extract_package_name("/home/dev/app/src/main/java/a/b/C.java") == "a.b"

    def test_kotlin_marker_checked_first(self):
        path = "app/src/main/kotlin/org/src/main/java/D.kt"
        assert extract_package_name(path) == "org.src.main.java"

    def test_repeated_marker_stays_in_package(self):
        path = "app/src/main/kotlin/org/src/main/kotlin/D.kt"
        assert extract_package_name(path) == "org.src.main.kotlin"

    def test_file_directly_under_source_root(self):
        assert extract_package_name("app/src/main/kotlin/Main.kt") == ""

    def test_missing_marker(self):
        with pytest.raises(ConfigResolutionError, match="src/main/kotlin or src/main/java"):
            extract_package_name("app/src/test/kotlin/a/b/C.kt")

    def test_same_result_on_repeated_calls(self):
        path = "app/src/main/kotlin/com/example/deep/pkg/Thing.kt"
        assert extract_package_name(path) == extract_package_name(path) == "com.example.deep.pkg"

    def test_custom_source_root(self):
        config = GeneratorConfig(source_roots=["src/commonMain/kotlin"])
        assert extract_package_name("lib/src/commonMain/kotlin/io/k/Foo.kt", config) == "io.k"


class TestModuleLocator:

    def test_module_root_is_prefix_before_src(self):
        assert module_root("app/src/main/kotlin/C.kt") == "app"

    def test_path_starting_with_src_has_no_root(self):
        with pytest.raises(ConfigResolutionError, match="/src"):
            module_root("/src/main/kotlin/C.kt")

    def test_groovy_build_file(self, workspace):
        make_module(workspace / "app", build_file="build.gradle")
        assert find_build_file("app/src/main/kotlin/com/x/Calc.kt") == "app/build.gradle"

    def test_kotlin_dsl_build_file(self, workspace):
        make_module(workspace / "app", build_file="build.gradle.kts")
        assert find_build_file("app/src/main/kotlin/com/x/Calc.kt") == "app/build.gradle.kts"

    def test_plain_build_gradle_preferred(self, workspace):
        make_module(workspace / "app", build_file="build.gradle")
        (workspace / "app" / "build.gradle.kts").write_text("", encoding="utf-8")
        assert find_build_file("app/src/main/kotlin/com/x/Calc.kt") == "app/build.gradle"

    def test_no_build_file(self, workspace):
        make_module(workspace / "app", build_file=None)
        with pytest.raises(ConfigResolutionError, match="gradle file"):
            find_build_file("app/src/main/kotlin/com/x/Calc.kt")

    def test_parent_build_file_is_not_used(self, workspace):
        (workspace / "build.gradle").write_text("testImplementation", encoding="utf-8")
        make_module(workspace / "app", build_file=None)
        with pytest.raises(ConfigResolutionError):
            find_build_file("app/src/main/kotlin/com/x/Calc.kt")

    def test_module_root_missing(self, workspace):
        with pytest.raises(ConfigResolutionError, match="gradle file"):
            find_build_file("ghost/src/main/kotlin/com/x/Calc.kt")

    def test_build_file_names_are_fixed(self, workspace):
        make_module(workspace / "app", build_file="settings.gradle")
        with pytest.raises(ConfigResolutionError, match="gradle file"):
            find_build_file("app/src/main/kotlin/com/x/Calc.kt")


class TestDependencyChecker:

    def test_marker_present(self, tmp_path):
        build = tmp_path / "build.gradle.kts"
        build.write_text('dependencies {\n    testImplementation("junit:junit:4.13.2")\n}\n')
        assert has_test_dependencies(str(build)) is True

    def test_marker_absent(self, tmp_path):
        build = tmp_path / "build.gradle"
        build.write_text("dependencies {\n    implementation 'com.squareup:okio:3.9.0'\n}\n")
        assert has_test_dependencies(str(build)) is False

    def test_missing_build_file(self, tmp_path):
        assert has_test_dependencies(str(tmp_path / "build.gradle")) is False

    def test_unreadable_build_file(self, tmp_path, monkeypatch):
        build = tmp_path / "build.gradle"
        build.write_text("testImplementation", encoding="utf-8")

        def denied(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(gradle_module, "open", denied, raising=False)
        with pytest.raises(ConfigResolutionError, match="Cannot read build file"):
            has_test_dependencies(str(build))

    def test_custom_marker(self, tmp_path):
        build = tmp_path / "build.gradle"
        build.write_text("dependencies {\n    androidTestImplementation 'x'\n}\n")
        config = GeneratorConfig(dependency_marker="androidTestImplementation")
        assert has_test_dependencies(str(build), config) is True
