"""Pydantic models for package records and derived comparison data."""

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(str, Enum):
    """Vulnerability severity levels."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: "str | Severity | None") -> "Severity":
        """Map a raw severity string onto a member, defaulting to UNKNOWN."""
        if isinstance(value, Severity):
            return value
        if not value:
            return cls.UNKNOWN
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.UNKNOWN


class Platform(str, Enum):
    """Package managers / registries a record can come from."""

    NPM = "NPM"
    MAVEN = "MAVEN"
    GRADLE = "GRADLE"
    PYPI = "PYPI"
    NUGET = "NUGET"
    GO = "GO"
    CARGO = "CARGO"
    CRATES = "CRATES"
    RUBYGEMS = "RUBYGEMS"
    COCOAPODS = "COCOAPODS"
    SWIFTPM = "SWIFTPM"
    PACKAGIST = "PACKAGIST"
    COMPOSER = "COMPOSER"
    HEX = "HEX"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: "str | Platform | None") -> "Platform | None":
        """Parse a free-form platform string (``"npm"``, ``"CocoaPods"``...)."""
        if value is None or isinstance(value, Platform):
            return value
        cleaned = str(value).strip().upper()
        if not cleaned:
            return None
        try:
            return cls(cleaned)
        except ValueError:
            return cls.OTHER

    @property
    def is_apple(self) -> bool:
        """True for the Apple packaging ecosystems."""
        return self in (Platform.COCOAPODS, Platform.SWIFTPM)


class Category(str, Enum):
    """Fixed taxonomy of what a package is used for."""

    UI_FRAMEWORK = "UI Framework"
    WEB_FRAMEWORK = "Web Framework"
    DATABASE = "Database/ORM"
    DATA_PROCESSING = "Data Processing"
    TESTING = "Testing"
    BUILD_TOOLS = "Build Tools"
    CODE_QUALITY = "Code Quality"
    HTTP_CLIENT = "HTTP Client"
    MESSAGING = "Messaging"
    MACHINE_LEARNING = "Machine Learning"
    DATA_VISUALIZATION = "Data Visualization"
    UTILITIES = "Utilities"
    LOGGING = "Logging"
    SECURITY = "Security"
    SERIALIZATION = "Serialization"
    MOBILE = "Mobile"
    GAMING = "Gaming"
    IOT = "IoT"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return CATEGORY_DESCRIPTIONS[self]

    @classmethod
    def display_names(cls) -> list[str]:
        """All category names, sorted, for filter UIs."""
        return sorted(c.value for c in cls)

    @classmethod
    def descriptions(cls) -> dict[str, str]:
        """Name to description mapping in taxonomy order."""
        return {c.value: c.description for c in cls}


CATEGORY_DESCRIPTIONS = {
    Category.UI_FRAMEWORK: "Building user interfaces, components, reactive UIs",
    Category.WEB_FRAMEWORK: "Building web servers, REST APIs, web applications",
    Category.DATABASE: "Database access, ORM, query builders, migrations",
    Category.DATA_PROCESSING: "Data analysis, manipulation, ETL, pipelines",
    Category.TESTING: "Unit tests, integration tests, mocking, test runners",
    Category.BUILD_TOOLS: "Bundlers, compilers, build systems, task runners",
    Category.CODE_QUALITY: "Linting, formatting, static analysis",
    Category.HTTP_CLIENT: "Making HTTP requests, REST clients, API consumption",
    Category.MESSAGING: "Message queues, pub/sub, event streaming",
    Category.MACHINE_LEARNING: "ML models, neural networks, AI frameworks",
    Category.DATA_VISUALIZATION: "Charts, graphs, plotting, dashboards",
    Category.UTILITIES: "General purpose utilities, helper functions, common tools",
    Category.LOGGING: "Logging frameworks, log management, monitoring",
    Category.SECURITY: "Authentication, authorization, encryption, security tools",
    Category.SERIALIZATION: "JSON, XML, data format conversion",
    Category.MOBILE: "iOS, Android, mobile app development",
    Category.GAMING: "Game engines, graphics, game development",
    Category.IOT: "Internet of Things, embedded systems, hardware interaction",
    Category.OTHER: "Miscellaneous or specialized libraries",
}


class Grade(str, Enum):
    """Letter grade derived from the overall score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class SortKey(str, Enum):
    """Sort orders supported by the search stage."""

    STARS = "stars"
    DEPENDENTS = "dependents"
    NAME = "name"
    UPDATED = "updated"


class RepoRef(BaseModel):
    """Reference to a GitHub repository."""

    owner: str
    repo: str

    @property
    def url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


# --- Package records ---


class Vulnerability(BaseModel):
    """A known vulnerability affecting a package."""

    id: str | None = None
    severity: Severity = Severity.UNKNOWN
    summary: str | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value):
        return Severity.parse(value)


class PackageMetrics(BaseModel):
    """Raw popularity, maintenance and security signals."""

    stars: int | None = Field(default=None, ge=0)
    forks: int | None = Field(default=None, ge=0)
    dependents: int | None = Field(default=None, ge=0)
    last_repository_release: date | None = None
    last_registry_release: str | None = None  # ISO date string from the registry
    latest_version: str | None = None
    is_deprecated: bool | None = None
    has_vulnerabilities: bool | None = None
    vulnerabilities: list[Vulnerability] = Field(default_factory=list)
    license: str | None = None


class PackageRecord(BaseModel):
    """A package as supplied by the ingestion layer."""

    name: str | None = None
    description: str | None = None
    keywords: list[str] = Field(default_factory=list)
    language: str | None = None
    platform: str | None = None
    homepage_url: str | None = None
    repository_url: str | None = None
    metrics: PackageMetrics = Field(default_factory=PackageMetrics)
    categories: list[str] = Field(default_factory=list)

    @field_validator("keywords", mode="before")
    @classmethod
    def _none_keywords(cls, value):
        return [] if value is None else value

    @property
    def platform_enum(self) -> Platform | None:
        return Platform.parse(self.platform)

    @property
    def categories_text(self) -> str:
        """Categories as the comma-joined string used for containment checks."""
        return ",".join(self.categories)


# --- Derived results ---


class CategoryResult(BaseModel):
    """Output of the classifier."""

    model_config = ConfigDict(frozen=True)

    categories: frozenset[Category]
    primary: Category
    scores: dict[Category, int] = Field(default_factory=dict)

    @property
    def names(self) -> list[str]:
        """Category names in taxonomy order."""
        return [c.value for c in Category if c in self.categories]


class ComparisonResult(BaseModel):
    """Multi-dimensional comparison score for a package."""

    model_config = ConfigDict(frozen=True)

    popularity: float = Field(ge=0, le=10)
    maintenance: float = Field(ge=0, le=10)
    security: float = Field(ge=0, le=10)
    community: float = Field(ge=0, le=10)
    quality: float = Field(ge=0, le=10)
    overall: float = Field(ge=0, le=10)
    grade: Grade
    is_actively_maintained: bool = False
    vulnerability_severity: int = Field(default=0, ge=0)


class SearchCriteria(BaseModel):
    """Structured filters and sort order for batch queries.

    Ranges are not sanity-checked: callers must not pass ``min > max``.
    """

    query: str | None = None
    categories: list[str] | None = None
    platforms: list[str] | None = None
    exclude_platforms: list[str] | None = None
    exclude_categories: list[str] | None = None
    min_stars: int | None = None
    max_stars: int | None = None
    min_dependents: int | None = None
    max_dependents: int | None = None
    last_commit_after: date | None = None
    include_grades: list[Grade] | None = None
    exclude_deprecated: bool | None = None
    exclude_vulnerable: bool | None = None
    exclude_unmaintained: bool | None = None
    sort_by: SortKey | None = None


# --- Final package analysis ---


class PackageAnalysis(BaseModel):
    """A record with every derived field attached."""

    record: PackageRecord
    categories: CategoryResult
    comparison: ComparisonResult

    # Platform inference
    supported_os: list[str] = Field(default_factory=list)
    runtime_environment: str = "unknown"
    framework: str = "none"
    documentation_url: str | None = None
    cost: str = "Unknown"
    deprecation_suspected: bool = False
    use_case: str | None = None

    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
