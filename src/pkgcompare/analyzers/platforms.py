"""Platform-keyed inference of supported OS, runtime, docs, framework, cost and use case."""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from pkgcompare.models.schemas import Category, PackageRecord, Platform, RepoRef

DESKTOP_OS = ("Linux", "macOS", "Windows")
JVM_OS = ("Linux", "macOS", "Windows", "Any OS with JVM")

SUPPORTED_OS: dict[Platform, tuple[str, ...]] = {
    Platform.NPM: DESKTOP_OS,
    Platform.MAVEN: JVM_OS,
    Platform.GRADLE: JVM_OS,
    Platform.PYPI: DESKTOP_OS,
    Platform.NUGET: ("Windows", "Linux", "macOS"),
    Platform.GO: ("Linux", "macOS", "Windows", "BSD"),
    Platform.CARGO: DESKTOP_OS,
    Platform.CRATES: DESKTOP_OS,
    Platform.RUBYGEMS: DESKTOP_OS,
    Platform.COCOAPODS: ("macOS", "iOS"),
    Platform.SWIFTPM: ("macOS", "iOS"),
    Platform.PACKAGIST: DESKTOP_OS,
    Platform.COMPOSER: DESKTOP_OS,
    Platform.HEX: DESKTOP_OS,
}

BROWSER_FRAMEWORKS = ("react", "vue", "angular", "svelte")
JVM_LANGUAGES = frozenset({"java", "kotlin", "scala"})
NODE_FRAMEWORKS = ("express", "nestjs", "koa", "fastify", "hapi")

# Package manager pages, used when nothing better is known
PACKAGE_PAGES: dict[Platform, str] = {
    Platform.NPM: "https://www.npmjs.com/package/{lower}",
    Platform.PYPI: "https://pypi.org/project/{lower}/",
    Platform.NUGET: "https://www.nuget.org/packages/{name}/",
    Platform.RUBYGEMS: "https://rubygems.org/gems/{name}",
    Platform.CARGO: "https://crates.io/crates/{lower}",
    Platform.CRATES: "https://crates.io/crates/{lower}",
}

# Ecosystem documentation hosts, first candidate wins
GITHUB_PAGES = "https://{owner}.github.io/{repo}"
ECOSYSTEM_DOCS: dict[Platform, str] = {
    Platform.NPM: GITHUB_PAGES,
    Platform.PYPI: "https://{lower}.readthedocs.io",
    Platform.MAVEN: GITHUB_PAGES,
    Platform.GRADLE: GITHUB_PAGES,
    Platform.RUBYGEMS: "https://{owner}.github.io/{lower}",
    Platform.NUGET: GITHUB_PAGES,
    Platform.CARGO: "https://docs.rs/{lower}",
    Platform.CRATES: "https://docs.rs/{lower}",
    Platform.GO: "https://pkg.go.dev/github.com/{owner}/{repo}",
    Platform.PACKAGIST: GITHUB_PAGES,
    Platform.COMPOSER: GITHUB_PAGES,
    Platform.COCOAPODS: GITHUB_PAGES,
    Platform.HEX: "https://hexdocs.pm/{lower}",
}

DOC_HOMEPAGE_HINTS = ("docs", "documentation", "readthedocs", "doc", "github.io")

OPEN_SOURCE_LICENSES = (
    "apache", "mit", "bsd", "gpl", "lgpl", "mpl", "isc", "unlicense", "cc0", "wtfpl",
    "artistic", "epl", "cddl", "zlib", "boost", "0bsd", "cc-by", "public domain",
)

DEPRECATION_PHRASES = (
    "deprecated", "deprecation", "no longer maintained", "unmaintained", "archived",
    "migrate to", "replaced by", "superseded", "end of life", "eol", "discontinued",
)

GITHUB_URL_PATTERNS = (
    re.compile(r"github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$"),
    re.compile(r"git@github\.com:([^/]+)/([^/]+?)(?:\.git)?$"),
)


@dataclass(frozen=True)
class FrameworkPattern:
    """Name pattern mapped to the framework it implies."""

    pattern: str
    framework: str

    def matches(self, name: str) -> bool:
        lower = name.lower()
        return (
            lower == self.pattern
            or lower.startswith(f"@{self.pattern}/")
            or lower.startswith(f"{self.pattern}-")
            # Bare short names ("gin", "koa") would hit "plugin", "koala"
            or (len(self.pattern) >= 5 and self.pattern in lower)
        )


# Ordered by specificity (react-native before react)
FRAMEWORK_PATTERNS = (
    FrameworkPattern("react-native", "react-native"),
    FrameworkPattern("react-dom", "react"),
    FrameworkPattern("react", "react"),
    FrameworkPattern("@angular/core", "angular"),
    FrameworkPattern("angular", "angular"),
    FrameworkPattern("vue", "vue"),
    FrameworkPattern("nestjs", "nestjs"),
    FrameworkPattern("next.js", "next.js"),
    FrameworkPattern("express", "express"),
    FrameworkPattern("koa", "koa"),
    FrameworkPattern("fastify", "fastify"),
    FrameworkPattern("hapi", "hapi"),
    FrameworkPattern("spring-boot", "spring-boot"),
    FrameworkPattern("spring-security", "spring-security"),
    FrameworkPattern("spring", "spring"),
    FrameworkPattern("django", "django"),
    FrameworkPattern("flask", "flask"),
    FrameworkPattern("fastapi", "fastapi"),
    FrameworkPattern("tornado", "tornado"),
    FrameworkPattern("rails", "rails"),
    FrameworkPattern("laravel", "laravel"),
    FrameworkPattern("symfony", "symfony"),
    FrameworkPattern("codeigniter", "codeigniter"),
    FrameworkPattern("asp.net", "asp.net"),
    FrameworkPattern("gin", "gin"),
    FrameworkPattern("echo", "echo"),
    FrameworkPattern("fiber", "fiber"),
    FrameworkPattern("rocket", "rocket"),
    FrameworkPattern("actix", "actix"),
    FrameworkPattern("axum", "axum"),
)


def infer_supported_os(
    language: str | None,
    platform: str | Platform | None,
    name: str | None = None,
) -> list[str]:
    """Infer operating systems a package runs on."""
    if language is None and platform is None:
        return ["Unknown"]

    lang = (language or "").lower()
    lower_name = (name or "").lower()

    if lang == "javascript" and any(f in lower_name for f in BROWSER_FRAMEWORKS):
        return ["Browser (all OS)"]

    systems = SUPPORTED_OS.get(Platform.parse(platform))
    if systems:
        return list(systems)

    if lang in JVM_LANGUAGES:
        return list(JVM_OS)

    return ["Platform-dependent"]


def infer_runtime_environment(language: str | None, framework: str | None = None) -> str:
    """Infer the runtime: jvm, nodejs, browser, python, native, dotnet or unknown."""
    if not language:
        return "unknown"
    lang = language.lower()
    fw = (framework or "").lower()

    if lang in JVM_LANGUAGES or lang in ("groovy", "clojure"):
        return "jvm"
    if lang in ("javascript", "typescript"):
        if any(f in fw for f in NODE_FRAMEWORKS):
            return "nodejs"
        return "browser"
    if lang == "python":
        return "python"
    if lang in ("c#", "f#", "vb.net"):
        return "dotnet"
    if lang in ("c", "c++", "rust", "go", "zig"):
        return "native"
    return "unknown"


def infer_framework(name: str | None) -> str:
    """Infer the framework a package belongs to from its name, or "none"."""
    if not name:
        return "none"
    for pattern in FRAMEWORK_PATTERNS:
        if pattern.matches(name):
            return pattern.framework
    return "none"


def parse_github_url(url: str | None) -> RepoRef | None:
    """Extract owner/repo from a GitHub URL."""
    if not url:
        return None
    for pattern in GITHUB_URL_PATTERNS:
        match = pattern.search(url.strip())
        if match:
            return RepoRef(owner=match.group(1), repo=match.group(2))
    return None


def infer_documentation_url(
    record: PackageRecord,
    api_documentation_url: str | None = None,
) -> str | None:
    """Best-guess documentation URL.

    Priority:
    1. Documentation URL reported by the registry
    2. Homepage that looks like documentation
    3. Ecosystem docs host derived from the GitHub repository
    4. Package manager page
    """
    if api_documentation_url:
        return api_documentation_url

    homepage = record.homepage_url
    if homepage:
        lower_home = homepage.lower()
        if any(h in lower_home for h in DOC_HOMEPAGE_HINTS) or lower_home.rstrip("/").endswith(".io"):
            return homepage

    platform = record.platform_enum
    name = record.name
    if not name:
        return None

    repo = parse_github_url(record.repository_url)
    if platform is not None and repo is not None:
        template = ECOSYSTEM_DOCS.get(platform, GITHUB_PAGES)
        return template.format(owner=repo.owner, repo=repo.repo, name=name, lower=name.lower())

    page = PACKAGE_PAGES.get(platform) if platform is not None else None
    return page.format(name=name, lower=name.lower()) if page else None


def is_open_source_license(license_id: str | None) -> bool:
    if not license_id:
        return False
    lower = license_id.lower()
    return any(l in lower for l in OPEN_SOURCE_LICENSES)


def determine_cost(license_id: str | None) -> str:
    """Cost model implied by a license string."""
    if license_id is None:
        return "Unknown"
    if is_open_source_license(license_id):
        return "Free / Open Source"
    return "Check License"


def looks_deprecated(description: str | None, keywords: Iterable[str] | None = None) -> bool:
    """Text heuristic for deprecation notices in description or keywords."""
    texts = [description or ""] + [k for k in (keywords or []) if k]
    for text in texts:
        lower = text.lower()
        if any(re.search(rf"(?<![a-z]){re.escape(p)}(?![a-z])", lower) for p in DEPRECATION_PHRASES):
            return True
    return False


DEFAULT_USE_CASE = "A useful library for your development needs."

USE_CASE_PHRASES: dict[Category, str] = {
    Category.UI_FRAMEWORK: "build modern user interfaces and interactive web applications",
    Category.WEB_FRAMEWORK: "create web servers and REST APIs",
    Category.DATABASE: "work with databases and manage data",
    Category.DATA_PROCESSING: "analyze and process large amounts of data",
    Category.TESTING: "write and run tests for your code",
    Category.BUILD_TOOLS: "compile and bundle your code for production",
    Category.CODE_QUALITY: "ensure your code follows best practices",
    Category.HTTP_CLIENT: "make API calls and fetch data from web services",
    Category.MESSAGING: "handle real-time messaging and event streaming",
    Category.MACHINE_LEARNING: "build AI models and implement machine learning",
    Category.DATA_VISUALIZATION: "create charts, graphs, and visual dashboards",
    Category.LOGGING: "track and monitor your application's behavior",
    Category.SECURITY: "secure your application and protect user data",
    Category.SERIALIZATION: "convert data between different formats (like JSON)",
    Category.MOBILE: "develop mobile applications for iOS and Android",
    Category.UTILITIES: "perform common programming tasks more easily",
}
_USE_CASE_BY_NAME = {c.value.lower(): phrase for c, phrase in USE_CASE_PHRASES.items()}

# Used when no category has a phrase; first verb found in the description wins
DESCRIPTION_ACTIONS = (
    (("build", "create"), "build and create"),
    (("manage", "handle"), "manage and handle"),
    (("process", "analyze"), "process and analyze"),
    (("connect", "communicate"), "connect and communicate"),
)


def _join_phrases(parts: list[str]) -> str:
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return f"{', '.join(parts[:-1])}, and {parts[-1]}"


def describe_use_case(
    name: str | None,
    description: str | None = None,
    categories: Iterable[str | Category] | None = None,
    language: str | None = None,
) -> str:
    """Plain-language sentence on what a package is for.

    Category phrases are joined as "a", "a and b" or "a, b, and c" and
    followed by the language, e.g. "express helps you create web servers
    and REST APIs in JavaScript projects."
    """
    category_names = [
        (c.value if isinstance(c, Category) else str(c)).strip().lower()
        for c in (categories or [])
    ]
    if not name and not description and not category_names:
        return DEFAULT_USE_CASE

    parts = []
    for category_name in category_names:
        phrase = _USE_CASE_BY_NAME.get(category_name)
        if phrase and phrase not in parts:
            parts.append(phrase)

    if parts:
        purpose = _join_phrases(parts)
    else:
        purpose = "solve common development challenges"
        lower = (description or "").lower()
        for verbs, action in DESCRIPTION_ACTIONS:
            if any(v in lower for v in verbs):
                purpose = f"{action} software for common development tasks"
                break

    where = f"{language} projects" if language else "your projects"
    subject = name or "This library"
    return f"{subject} helps you {purpose} in {where}."
