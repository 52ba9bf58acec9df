"""Signal tables for category inference.

Each category lists the artifact-name patterns, description phrase groups,
negative description phrases, keywords and languages that count towards it.
Everything is lowercase.
"""

from dataclasses import dataclass

from pkgcompare.models.schemas import Category


@dataclass(frozen=True)
class CategoryRule:
    """Pattern lists for one category."""

    names: tuple[str, ...]
    description_groups: tuple[tuple[str, ...], ...]
    keywords: frozenset[str]
    languages: frozenset[str] = frozenset()
    negative_phrases: tuple[str, ...] = ()


JS = frozenset({"javascript", "typescript"})

CATEGORY_RULES: dict[Category, CategoryRule] = {
    Category.UI_FRAMEWORK: CategoryRule(
        names=(
            "react", "vue", "angular", "svelte", "preact", "solid-js", "ember",
            "backbone", "lit-element", "alpinejs", "vuetify", "antd", "chakra-ui",
            "material-ui", "primeng", "bootstrap", "jquery-ui", "reactjs",
        ),
        description_groups=(
            ("ui framework", "user interface", "user interfaces", "component library",
             "ui components", "frontend framework", "front-end framework", "view library"),
            ("reactive", "declarative", "virtual dom", "single-page", "single page",
             "frontend", "front-end", "components"),
        ),
        negative_phrases=("backend", "back-end", "server-side", "server side", "http server"),
        keywords=frozenset({
            "react", "vue", "angular", "svelte", "ui", "components", "component",
            "frontend", "front-end", "jsx", "web-components",
        }),
        languages=JS,
    ),
    Category.WEB_FRAMEWORK: CategoryRule(
        names=(
            "express", "koa", "fastify", "hapi", "nestjs", "spring-boot", "spring-webmvc",
            "django", "flask", "fastapi", "starlette", "tornado", "rails", "sinatra",
            "laravel", "symfony", "gin", "echo", "fiber", "rocket", "actix-web", "axum",
            "phoenix", "next",
        ),
        description_groups=(
            ("web framework", "http server", "web server", "web application framework",
             "web applications"),
            ("rest api", "restful", "microservice", "microservices", "routing",
             "middleware", "server-side"),
        ),
        negative_phrases=("http client", "rest client", "api client", "making http requests"),
        keywords=frozenset({
            "web", "framework", "server", "http-server", "rest", "api", "mvc",
            "middleware", "microservices", "router", "web-framework",
        }),
        languages=frozenset({
            "javascript", "typescript", "python", "java", "kotlin", "ruby", "php",
            "go", "rust", "c#", "elixir",
        }),
    ),
    Category.DATABASE: CategoryRule(
        names=(
            "hibernate", "sequelize", "typeorm", "prisma", "sqlalchemy", "mongoose",
            "gorm", "diesel", "knex", "jdbc", "mysql", "postgres", "pg", "sqlite",
            "mongodb", "redis", "jooq", "mybatis", "peewee", "alembic", "flyway",
            "liquibase", "dapper", "psycopg2",
        ),
        description_groups=(
            ("database", "databases", "orm", "object-relational", "query builder"),
            ("sql", "mongodb", "postgresql", "mysql", "sqlite", "migrations",
             "persistence", "redis"),
        ),
        keywords=frozenset({
            "database", "orm", "sql", "mysql", "postgres", "postgresql", "mongodb",
            "sqlite", "db", "redis", "query-builder", "jdbc",
        }),
        languages=frozenset({
            "java", "kotlin", "python", "javascript", "typescript", "go", "ruby",
            "php", "c#", "rust",
        }),
    ),
    Category.DATA_PROCESSING: CategoryRule(
        names=(
            "pandas", "numpy", "polars", "dask", "pyspark", "spark", "pyarrow",
            "arrow", "scipy", "xarray", "beam", "airflow", "luigi", "csv",
        ),
        description_groups=(
            ("data analysis", "data processing", "dataframe", "dataframes",
             "data manipulation"),
            ("etl", "data pipeline", "data pipelines", "scientific computing",
             "arrays", "numerical"),
        ),
        keywords=frozenset({
            "data", "dataframe", "etl", "pandas", "numpy", "analytics", "big-data",
            "pipeline", "scientific", "data-science", "csv",
        }),
        languages=frozenset({"python", "scala", "r", "julia"}),
    ),
    Category.TESTING: CategoryRule(
        names=(
            "jest", "mocha", "vitest", "jasmine", "karma", "junit", "testng", "mockito",
            "pytest", "unittest", "cypress", "playwright", "selenium", "chai", "sinon",
            "enzyme", "rspec", "hypothesis", "nose", "testify", "assertj", "testing-library",
        ),
        description_groups=(
            ("testing framework", "test framework", "test runner", "unit test",
             "unit tests", "unit testing"),
            ("integration test", "integration tests", "mocking", "assertion",
             "assertions", "end-to-end", "e2e", "test"),
        ),
        keywords=frozenset({
            "test", "testing", "tdd", "bdd", "mock", "mocking", "assert", "assertion",
            "unit-testing", "e2e", "jest", "spec",
        }),
        languages=frozenset({"javascript", "typescript", "java", "kotlin", "python", "ruby", "go"}),
    ),
    Category.BUILD_TOOLS: CategoryRule(
        names=(
            "webpack", "vite", "rollup", "parcel", "esbuild", "maven", "gradle", "gulp",
            "grunt", "babel", "swc", "turbo", "bazel", "cmake", "setuptools", "browserify",
        ),
        description_groups=(
            ("build tool", "bundler", "module bundler", "build system"),
            ("compiler", "transpiler", "task runner", "minifier", "hot module replacement"),
        ),
        keywords=frozenset({
            "build", "bundler", "webpack", "compiler", "transpiler", "build-tool",
            "bundle", "babel", "rollup", "vite", "gradle",
        }),
        languages=frozenset({"javascript", "typescript", "java", "kotlin", "groovy"}),
    ),
    Category.CODE_QUALITY: CategoryRule(
        names=(
            "eslint", "prettier", "stylelint", "tslint", "pylint", "flake8", "black",
            "ruff", "mypy", "checkstyle", "spotbugs", "pmd", "sonar", "jshint", "rubocop",
            "golangci-lint", "clippy",
        ),
        description_groups=(
            ("linter", "linting", "code quality", "static analysis"),
            ("code style", "formatter", "code formatter", "style guide", "type checker"),
        ),
        keywords=frozenset({
            "lint", "linter", "eslint", "formatter", "static-analysis", "code-quality",
            "style", "prettier", "eslintplugin", "eslintconfig",
        }),
        languages=frozenset({"javascript", "typescript", "python", "java", "ruby", "go"}),
    ),
    Category.HTTP_CLIENT: CategoryRule(
        names=(
            "axios", "node-fetch", "got", "superagent", "requests", "httpx", "aiohttp",
            "okhttp", "retrofit", "urllib3", "httpclient", "ky", "undici", "request",
            "feign", "faraday", "resty",
        ),
        description_groups=(
            ("http client", "rest client", "api client", "http requests", "http request"),
            ("ajax", "fetch api", "promise based", "http library", "xmlhttprequest"),
        ),
        negative_phrases=("http server", "web framework", "server-side"),
        keywords=frozenset({
            "http", "client", "http-client", "request", "requests", "ajax", "fetch",
            "rest-client", "xhr", "promise",
        }),
        languages=frozenset({"javascript", "typescript", "python", "java", "kotlin", "go", "ruby"}),
    ),
    Category.MESSAGING: CategoryRule(
        names=(
            "kafka", "kafkajs", "rabbitmq", "amqp", "amqplib", "mqtt", "nats", "zeromq",
            "zmq", "activemq", "pulsar", "celery", "kombu", "bullmq", "pika",
        ),
        description_groups=(
            ("message queue", "message broker", "pub/sub", "publish/subscribe"),
            ("event streaming", "event bus", "messaging", "streams", "job queue"),
        ),
        keywords=frozenset({
            "queue", "messaging", "kafka", "rabbitmq", "amqp", "pubsub", "mqtt",
            "broker", "events", "message-queue",
        }),
        languages=frozenset({"java", "scala", "python", "go", "javascript", "typescript"}),
    ),
    Category.MACHINE_LEARNING: CategoryRule(
        names=(
            "tensorflow", "torch", "pytorch", "torchvision", "keras", "scikit-learn",
            "sklearn", "xgboost", "lightgbm", "catboost", "transformers", "jax", "onnx",
            "mlflow", "spacy", "nltk", "langchain",
        ),
        description_groups=(
            ("machine learning", "deep learning", "neural network", "neural networks"),
            ("artificial intelligence", "ai model", "ml framework",
             "natural language processing", "computer vision", "language model"),
        ),
        keywords=frozenset({
            "machine-learning", "deep-learning", "ml", "ai", "neural-network",
            "tensorflow", "pytorch", "nlp", "llm", "artificial-intelligence",
        }),
        languages=frozenset({"python", "c++", "julia", "r"}),
    ),
    Category.DATA_VISUALIZATION: CategoryRule(
        names=(
            "matplotlib", "plotly", "d3", "chart.js", "chartjs", "echarts", "highcharts",
            "recharts", "seaborn", "bokeh", "altair", "vega", "nivo", "apexcharts",
            "victory",
        ),
        description_groups=(
            ("data visualization", "visualization", "visualizations", "charting", "charts"),
            ("plotting", "graphs", "dashboard", "dashboards", "diagrams", "svg"),
        ),
        keywords=frozenset({
            "chart", "charts", "visualization", "graph", "plot", "plotting", "d3",
            "dataviz", "data-visualization", "svg",
        }),
        languages=frozenset({"javascript", "typescript", "python", "r"}),
    ),
    Category.UTILITIES: CategoryRule(
        names=(
            "lodash", "underscore", "ramda", "guava", "commons-lang", "commons-lang3",
            "commons-io", "apache-commons", "boost", "moment", "dayjs", "date-fns",
            "uuid", "toolz", "more-itertools", "utils", "util", "helpers",
        ),
        description_groups=(
            ("utility library", "utility functions", "helper functions", "utilities"),
            ("general purpose", "general-purpose", "common tools", "functional programming"),
        ),
        negative_phrases=("framework", "server", "database", "test"),
        keywords=frozenset({
            "util", "utils", "utility", "utilities", "helpers", "helper", "functional",
            "lodash", "common", "tools",
        }),
        languages=frozenset({"javascript", "typescript", "java", "python", "c++"}),
    ),
    Category.LOGGING: CategoryRule(
        names=(
            "log4j", "log4j-core", "slf4j", "slf4j-api", "logback", "logback-classic",
            "winston", "bunyan", "pino", "serilog", "nlog", "zap", "logrus", "loguru",
            "structlog", "morgan", "log4net", "tinylog", "zerolog",
        ),
        description_groups=(
            ("logging", "logging framework", "logger", "log management"),
            ("structured logging", "log levels", "log output", "log files", "audit trail"),
        ),
        negative_phrases=("login", "dialog", "catalog", "blog"),
        keywords=frozenset({
            "logging", "logger", "log", "logs", "winston", "log4j", "slf4j",
            "structured-logging",
        }),
        languages=frozenset({"java", "kotlin", "javascript", "typescript", "go", "python", "c#"}),
    ),
    Category.SECURITY: CategoryRule(
        names=(
            "passport", "jsonwebtoken", "jwt", "oauth", "oauthlib", "bcrypt", "argon2",
            "spring-security", "helmet", "csurf", "cryptography", "pyjwt", "jose",
            "keycloak", "shiro", "bouncycastle", "bcprov", "libsodium", "authlib",
        ),
        description_groups=(
            ("authentication", "authorization", "security"),
            ("encryption", "cryptography", "oauth", "json web token", "json web tokens",
             "password hashing", "tls", "ssl", "csrf"),
        ),
        keywords=frozenset({
            "security", "auth", "authentication", "authorization", "jwt", "oauth",
            "crypto", "encryption", "bcrypt", "password",
        }),
        languages=frozenset({"java", "kotlin", "javascript", "typescript", "python", "go", "rust"}),
    ),
    Category.SERIALIZATION: CategoryRule(
        names=(
            "jackson", "jackson-databind", "gson", "serde", "serde_json", "protobuf",
            "avro", "msgpack", "bson", "yaml", "pyyaml", "snakeyaml", "json", "xml",
            "toml", "cbor", "thrift", "marshmallow", "fastjson", "ujson", "orjson",
            "jaxb", "xstream", "flatbuffers",
        ),
        description_groups=(
            ("serialization", "serialize", "deserialize", "serializer", "deserialization"),
            ("json", "xml", "yaml", "protocol buffers", "data format", "parser"),
        ),
        negative_phrases=("framework", "server"),
        keywords=frozenset({
            "json", "xml", "yaml", "serialization", "serializer", "parser", "protobuf",
            "deserialization", "msgpack", "toml",
        }),
        languages=frozenset({"java", "kotlin", "rust", "python", "javascript", "typescript", "go"}),
    ),
    Category.MOBILE: CategoryRule(
        names=(
            "react-native", "flutter", "ionic", "xamarin", "cordova", "capacitor", "expo",
            "android", "ios", "swiftui", "uikit", "nativescript", "alamofire",
        ),
        description_groups=(
            ("mobile", "android", "ios"),
            ("cross-platform app", "native app", "native apps", "iphone", "ipad", "app store"),
        ),
        keywords=frozenset({
            "mobile", "android", "ios", "react-native", "flutter", "cordova", "ionic",
            "iphone", "swift", "cocoapods",
        }),
        languages=frozenset({"swift", "objective-c", "kotlin", "dart", "java"}),
    ),
    Category.GAMING: CategoryRule(
        names=(
            "unity", "unreal", "godot", "pygame", "phaser", "three", "babylonjs", "pixi.js",
            "pixijs", "libgdx", "bevy", "love2d", "monogame", "raylib", "sfml", "cocos2d",
        ),
        description_groups=(
            ("game engine", "game development", "game framework", "gaming"),
            ("3d graphics", "2d games", "sprites", "webgl", "rendering engine", "physics engine"),
        ),
        keywords=frozenset({
            "game", "gamedev", "game-engine", "games", "webgl", "3d", "2d", "graphics",
            "phaser", "unity",
        }),
        languages=frozenset({"c++", "c#", "rust", "javascript", "typescript", "lua", "python"}),
    ),
    Category.IOT: CategoryRule(
        names=(
            "arduino", "raspberry", "rpi", "johnny-five", "esp32", "esp8266", "micropython",
            "platformio", "gpio", "zigbee", "modbus", "onoff",
        ),
        description_groups=(
            ("internet of things", "iot", "embedded"),
            ("microcontroller", "sensor", "sensors", "hardware", "firmware",
             "raspberry pi", "gpio"),
        ),
        keywords=frozenset({
            "iot", "arduino", "raspberry-pi", "embedded", "hardware", "sensor", "gpio",
            "microcontroller", "esp32", "robotics",
        }),
        languages=frozenset({"c", "c++", "python", "javascript", "rust"}),
    ),
}

# Most specific first; generic buckets last.
PRIMARY_PRIORITY: tuple[Category, ...] = (
    Category.UI_FRAMEWORK,
    Category.WEB_FRAMEWORK,
    Category.MACHINE_LEARNING,
    Category.DATA_VISUALIZATION,
    Category.TESTING,
    Category.DATABASE,
    Category.BUILD_TOOLS,
    Category.HTTP_CLIENT,
    Category.MESSAGING,
    Category.DATA_PROCESSING,
    Category.CODE_QUALITY,
    Category.SECURITY,
    Category.SERIALIZATION,
    Category.LOGGING,
    Category.MOBILE,
    Category.GAMING,
    Category.IOT,
    Category.UTILITIES,
    Category.OTHER,
)
