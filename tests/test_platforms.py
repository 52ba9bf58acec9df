"""Tests for platform-keyed inference."""

import pytest

from pkgcompare.analyzers.platforms import (
    DEFAULT_USE_CASE,
    JVM_OS,
    describe_use_case,
    determine_cost,
    infer_documentation_url,
    infer_framework,
    infer_runtime_environment,
    infer_supported_os,
    looks_deprecated,
    parse_github_url,
)
from pkgcompare.models.schemas import Category, PackageRecord


class TestSupportedOS:
    def test_jvm_platform(self):
        assert infer_supported_os("Java", "maven") == list(JVM_OS)

    def test_browser_framework(self):
        assert infer_supported_os("JavaScript", "npm", "react-dom") == ["Browser (all OS)"]

    def test_apple(self):
        assert infer_supported_os("Swift", "CocoaPods") == ["macOS", "iOS"]

    def test_jvm_language_without_platform(self):
        assert infer_supported_os("Kotlin", None) == list(JVM_OS)

    def test_unknown(self):
        assert infer_supported_os(None, None) == ["Unknown"]
        assert infer_supported_os("Haskell", "hackage") == ["Platform-dependent"]


class TestRuntime:
    @pytest.mark.parametrize(
        "language,framework,expected",
        [
            ("Java", None, "jvm"),
            ("Scala", None, "jvm"),
            ("JavaScript", "express", "nodejs"),
            ("TypeScript", "react", "browser"),
            ("Python", None, "python"),
            ("C#", None, "dotnet"),
            ("Rust", None, "native"),
            ("Haskell", None, "unknown"),
            (None, None, "unknown"),
        ],
    )
    def test_runtime(self, language, framework, expected):
        assert infer_runtime_environment(language, framework) == expected


class TestFramework:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("react-native-maps", "react-native"),
            ("react-dom", "react"),
            ("@angular/core", "angular"),
            ("spring-boot-starter-web", "spring-boot"),
            ("django-rest-framework", "django"),
            ("plugin-utils", "none"),
            (None, "none"),
        ],
    )
    def test_framework(self, name, expected):
        assert infer_framework(name) == expected


class TestGitHubUrl:
    def test_https(self):
        ref = parse_github_url("https://github.com/expressjs/express.git")
        assert (ref.owner, ref.repo) == ("expressjs", "express")
        assert ref.url == "https://github.com/expressjs/express"

    def test_ssh(self):
        ref = parse_github_url("git@github.com:psf/requests.git")
        assert (ref.owner, ref.repo) == ("psf", "requests")

    def test_trailing_slash(self):
        assert parse_github_url("https://github.com/a/b/").repo == "b"

    def test_not_github(self):
        assert parse_github_url("https://gitlab.com/a/b") is None
        assert parse_github_url(None) is None


class TestDocumentationUrl:
    def test_api_url_wins(self):
        record = PackageRecord(name="x", homepage_url="https://docs.x.dev")
        assert infer_documentation_url(record, "https://api.example/docs") == "https://api.example/docs"

    def test_docs_homepage(self):
        record = PackageRecord(name="pytest", platform="pypi", homepage_url="https://docs.pytest.org")
        assert infer_documentation_url(record) == "https://docs.pytest.org"

    def test_ecosystem_host_from_repo(self):
        record = PackageRecord(
            name="Requests",
            platform="pypi",
            homepage_url="https://requests.example.com",
            repository_url="https://github.com/psf/requests",
        )
        assert infer_documentation_url(record) == "https://requests.readthedocs.io"

    def test_cargo(self):
        record = PackageRecord(name="serde", platform="cargo", repository_url="https://github.com/serde-rs/serde")
        assert infer_documentation_url(record) == "https://docs.rs/serde"

    def test_package_page_fallback(self):
        record = PackageRecord(name="left-pad", platform="npm")
        assert infer_documentation_url(record) == "https://www.npmjs.com/package/left-pad"

    def test_nothing_known(self):
        assert infer_documentation_url(PackageRecord(name="x", platform="maven")) is None


class TestCostAndDeprecation:
    @pytest.mark.parametrize(
        "license_id,expected",
        [
            (None, "Unknown"),
            ("MIT", "Free / Open Source"),
            ("Apache-2.0", "Free / Open Source"),
            ("Proprietary", "Check License"),
        ],
    )
    def test_cost(self, license_id, expected):
        assert determine_cost(license_id) == expected

    def test_deprecated_description(self):
        assert looks_deprecated("This package is deprecated, use undici instead")
        assert looks_deprecated("No longer maintained.")

    def test_deprecated_keyword(self):
        assert looks_deprecated(None, ["http", "unmaintained"])

    def test_not_deprecated(self):
        assert not looks_deprecated("Fast HTTP client")
        assert not looks_deprecated(None)


class TestUseCase:
    def test_single_category_with_language(self):
        assert describe_use_case("express", "Fast web framework", ["Web Framework"], "JavaScript") == (
            "express helps you create web servers and REST APIs in JavaScript projects."
        )

    def test_two_categories(self):
        assert describe_use_case("commons", None, ["Logging", "Utilities"]) == (
            "commons helps you track and monitor your application's behavior"
            " and perform common programming tasks more easily in your projects."
        )

    def test_three_categories(self):
        text = describe_use_case("kit", None, [Category.TESTING, Category.LOGGING, Category.SECURITY], "Go")
        assert text == (
            "kit helps you write and run tests for your code,"
            " track and monitor your application's behavior,"
            " and secure your application and protect user data in Go projects."
        )

    def test_category_names_are_case_insensitive(self):
        assert "create web servers" in describe_use_case("x", None, [" web framework "])

    def test_no_phrase_falls_back(self):
        assert describe_use_case("left-pad", None, ["Other"]) == (
            "left-pad helps you solve common development challenges in your projects."
        )

    def test_description_action(self):
        text = describe_use_case("confy", "Tools to manage config files", ["Other"])
        assert text.startswith("confy helps you manage and handle ")

    def test_nothing_known(self):
        assert describe_use_case(None) == DEFAULT_USE_CASE

    def test_unnamed(self):
        assert describe_use_case(None, None, ["Testing"]).startswith("This library helps you write and run tests")
