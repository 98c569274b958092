"""
Application-wide constants and heuristic tables.

This module defines the pattern lists and weight tables that drive file
classification and scoring. Keeping them here as data (instead of inline
checks) lets the classifier, the fast heuristic scorer, and the indexer's
priority map each iterate over a table, and lets the rules be tested on their
own.

Two scorers read from this module:
- The detailed priority classifier (`core.classifier`), which uses the
  CLASSIFIER_* tables, ROLE_SCORES and the adjustment tables.
- The fast heuristic scorer (`core.file_utils`), which uses the FAST_* tables.

The indexer's priority file map (`core.indexer`) uses the PRIORITY_MAP_* tables.
These lists overlap but are deliberately independent of each other.
"""

import re
from typing import Final, Mapping

from core.models import CategoryThresholds
from models import (
    ArchitecturalRole,
    CharacteristicBonus,
    FileNameBonus,
    ProjectType,
)


# ============================================================================
# Shared file name tables
# ============================================================================

# Package manifests recognized by the classifier and the priority map.
PACKAGE_FILES: Final[frozenset[str]] = frozenset(
    {
        "package.json",
        "requirements.txt",
        "pom.xml",
        "build.gradle",
        "Cargo.toml",
        "go.mod",
        "composer.json",
        "Gemfile",
        "setup.py",
        "pyproject.toml",
        "Package.swift",
        "pubspec.yaml",
    }
)

# Application entry points recognized by the classifier and the priority map.
ENTRY_POINT_FILES: Final[frozenset[str]] = frozenset(
    {
        "index.js",
        "index.ts",
        "main.js",
        "main.ts",
        "app.js",
        "app.ts",
        "server.js",
        "server.ts",
        "main.py",
        "app.py",
        "__main__.py",
        "Main.java",
        "Program.cs",
        "main.go",
        "lib.rs",
        "main.rs",
    }
)

# Configuration file name patterns (matched with `search` against the file name).
CONFIG_FILE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(p)
    for p in (
        r"\.config\.(js|ts|json)$",
        r"webpack\.config\.",
        r"vite\.config\.",
        r"rollup\.config\.",
        r"babel\.config\.",
        r"jest\.config\.",
        r"vitest\.config\.",
        r"tsconfig\.json$",
        r"\.eslintrc\.",
        r"\.prettierrc",
        r"\.env",
        r"\.yml$",
        r"\.yaml$",
        r"\.toml$",
        r"\.ini$",
    )
)

SCHEMA_NAME_MARKERS: Final[tuple[str, ...]] = ("schema", "openapi", "swagger")


# ============================================================================
# Detailed priority classifier tables
# ============================================================================

CLASSIFIER_SCHEMA_SUFFIXES: Final[tuple[str, ...]] = (".graphql", ".proto", ".avsc")

CLASSIFIER_INFRA_NAME_MARKERS: Final[tuple[str, ...]] = (
    "Dockerfile",
    "docker-compose",
    ".gitlab-ci",
    "jenkins",
    "terraform",
    "ansible",
)
CLASSIFIER_INFRA_DIRS: Final[frozenset[str]] = frozenset({"docker", ".github"})
CLASSIFIER_INFRA_FILE_NAMES: Final[frozenset[str]] = frozenset({".dockerignore"})

CLASSIFIER_TEST_NAME_MARKERS: Final[tuple[str, ...]] = (".test.", ".spec.")
CLASSIFIER_TEST_NAME_SUFFIXES: Final[tuple[str, ...]] = ("Test.java", "_test.go")
CLASSIFIER_TEST_DIRS: Final[frozenset[str]] = frozenset({"test", "tests", "__tests__"})

CLASSIFIER_DOC_SUFFIXES: Final[tuple[str, ...]] = (".md", ".txt", ".rst", ".adoc")
CLASSIFIER_DOC_DIRS: Final[frozenset[str]] = frozenset({"docs"})

CLASSIFIER_GENERATED_NAME_MARKERS: Final[tuple[str, ...]] = (".generated.", ".gen.")
CLASSIFIER_GENERATED_DIRS: Final[frozenset[str]] = frozenset(
    {"generated", ".next", "dist", "build"}
)
CLASSIFIER_GENERATED_CONTENT_MARKERS: Final[tuple[str, ...]] = (
    "This file was automatically generated",
    "DO NOT EDIT",
    "Auto-generated",
    "@generated",
    "Code generated by",
)

# More than COMPLEX_LOGIC_THRESHOLD total matches marks a file as complex.
COMPLEX_LOGIC_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(p)
    for p in (
        r"class\s+\w+",
        r"function\s+\w+",
        r"def\s+\w+",
        r"if\s*\(",
        r"for\s*\(",
        r"while\s*\(",
        r"switch\s*\(",
        r"try\s*{",
    )
)
COMPLEX_LOGIC_THRESHOLD: Final[int] = 10

EXTERNAL_DEPENDENCY_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(p)
    for p in (
        r"import\s+.*from\s+['\"][^.]",
        r"require\s*\(\s*['\"][^.]",
        r"from\s+\w+\s+import",
        r"#include\s*<\w+>",
    )
)

PUBLIC_INTERFACE_NAME_MARKERS: Final[tuple[str, ...]] = ("api", "interface", "public")
PUBLIC_INTERFACE_DIRS: Final[frozenset[str]] = frozenset({"api", "public"})
PUBLIC_INTERFACE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(p)
    for p in (
        r"export\s+(class|function|interface|type)",
        r"module\.exports",
        r"public\s+(class|interface)",
        r"__all__\s*=",
    )
)

# Role detection markers, checked in the classifier's priority chain.
DEPLOYMENT_NAME_MARKERS: Final[tuple[str, ...]] = ("deploy",)
DEPLOYMENT_DIRS: Final[frozenset[str]] = frozenset({"deploy"})
BUILD_SYSTEM_NAME_MARKERS: Final[tuple[str, ...]] = ("build", "webpack", "rollup")
API_NAME_MARKERS: Final[tuple[str, ...]] = ("api",)
API_DIRS: Final[frozenset[str]] = frozenset({"api"})
DATA_ACCESS_NAME_MARKERS: Final[tuple[str, ...]] = ("model", "repository", "dao")
DATA_ACCESS_DIRS: Final[frozenset[str]] = frozenset({"models", "data"})
SECURITY_NAME_MARKERS: Final[tuple[str, ...]] = ("auth", "security", "crypto")
MONITORING_NAME_MARKERS: Final[tuple[str, ...]] = ("log", "monitor", "metric")
UTILITY_NAME_MARKERS: Final[tuple[str, ...]] = ("util", "helper")
UTILITY_DIRS: Final[frozenset[str]] = frozenset({"utils"})

# Extensions (without the dot) that earn the source-file bonus.
SOURCE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"js", "ts", "py", "java", "go", "rs", "cs", "php", "rb"}
)
# Extensions whose content is inspected for declaration density.
COMPLEXITY_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"js", "ts", "py", "java", "go", "rs", "cs"}
)

FUNCTION_DECLARATION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(function|def|func|fn|public|private|protected)\s+\w+"
)
CLASS_DECLARATION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(class|interface|struct|enum)\s+\w+"
)
IMPORT_PATTERN: Final[re.Pattern[str]] = re.compile(r"(import|require|from|#include|use)\s+")
CONTENT_COMPLEXITY_CAP: Final[int] = 25

# Score added for each boolean characteristic, in evaluation order.
CHARACTERISTIC_WEIGHTS: Final[tuple[CharacteristicBonus, ...]] = (
    CharacteristicBonus("is_package_definition", True, 100),
    CharacteristicBonus("is_entry_point", True, 90),
    CharacteristicBonus("is_configuration", True, 50),
    CharacteristicBonus("is_schema", True, 55),
    CharacteristicBonus("is_infrastructure", True, 50),
    CharacteristicBonus("is_public_interface", True, 45),
)

ROLE_SCORES: Final[Mapping[ArchitecturalRole, int]] = {
    ArchitecturalRole.CORE_BUSINESS_LOGIC: 80,
    ArchitecturalRole.API_INTERFACE: 75,
    ArchitecturalRole.SECURITY: 70,
    ArchitecturalRole.DATA_ACCESS: 65,
    ArchitecturalRole.CONFIGURATION: 60,
    ArchitecturalRole.INFRASTRUCTURE: 55,
    ArchitecturalRole.BUILD_SYSTEM: 50,
    ArchitecturalRole.DEPLOYMENT: 45,
    ArchitecturalRole.MONITORING: 40,
    ArchitecturalRole.UTILITY: 35,
    ArchitecturalRole.TESTING: 25,
    ArchitecturalRole.DOCUMENTATION: 20,
    ArchitecturalRole.UNKNOWN: 30,
}

SOURCE_EXTENSION_BONUS: Final[int] = 30
TEST_PENALTY: Final[int] = 15
GENERATED_PENALTY: Final[int] = 20
DOCUMENTATION_PENALTY: Final[int] = 10

# Human-readable reasons, in the order they appear in an ImportanceScore.
CHARACTERISTIC_REASONS: Final[tuple[tuple[str, str], ...]] = (
    ("is_package_definition", "Package/dependency definition"),
    ("is_entry_point", "Application entry point"),
    ("is_configuration", "Configuration file"),
    ("is_schema", "Schema/API definition"),
    ("is_infrastructure", "Infrastructure configuration"),
    ("is_public_interface", "Public API interface"),
    ("has_complex_logic", "Contains complex business logic"),
    ("has_external_dependencies", "Has external dependencies"),
)

ROLE_REASONS: Final[Mapping[ArchitecturalRole, str]] = {
    ArchitecturalRole.CORE_BUSINESS_LOGIC: "Core business logic",
    ArchitecturalRole.API_INTERFACE: "API interface",
    ArchitecturalRole.DATA_ACCESS: "Data access layer",
    ArchitecturalRole.SECURITY: "Security component",
}

PROJECT_TYPE_ADJUSTMENTS: Final[Mapping[ProjectType, tuple[CharacteristicBonus, ...]]] = {
    ProjectType.API_SERVICE: (
        CharacteristicBonus("architectural_role", ArchitecturalRole.API_INTERFACE, 20),
        CharacteristicBonus("is_schema", True, 15),
    ),
    ProjectType.LIBRARY: (
        CharacteristicBonus("is_public_interface", True, 25),
        CharacteristicBonus("is_documentation", True, 10),
    ),
    ProjectType.CLI_TOOL: (
        CharacteristicBonus("is_entry_point", True, 15),
        CharacteristicBonus("is_configuration", True, 10),
    ),
    ProjectType.MICROSERVICE: (
        CharacteristicBonus("is_infrastructure", True, 15),
        CharacteristicBonus("architectural_role", ArchitecturalRole.MONITORING, 10),
    ),
    ProjectType.MONOREPO: (
        CharacteristicBonus("is_package_definition", True, 10),
        CharacteristicBonus("architectural_role", ArchitecturalRole.BUILD_SYSTEM, 15),
    ),
}

# Keys are lowercase language names.
LANGUAGE_ADJUSTMENTS: Final[Mapping[str, tuple[FileNameBonus, ...]]] = {
    "typescript": (
        FileNameBonus("endswith", (".d.ts",), 15),
        FileNameBonus("equals", ("tsconfig.json",), 10),
    ),
    "python": (
        FileNameBonus("equals", ("__init__.py",), 15),
        FileNameBonus("equals", ("setup.py", "pyproject.toml"), 10),
    ),
    "java": (
        FileNameBonus("endswith", ("Application.java",), 15),
        FileNameBonus("equals", ("pom.xml", "build.gradle"), 10),
    ),
    "go": (
        FileNameBonus("equals", ("main.go",), 15),
        FileNameBonus("equals", ("go.mod",), 10),
    ),
}

# Keys are lowercase framework names.
FRAMEWORK_ADJUSTMENTS: Final[Mapping[str, tuple[FileNameBonus, ...]]] = {
    "react": (FileNameBonus("contains", ("App.", "index."), 10),),
    "express": (FileNameBonus("contains", ("server.", "app."), 10),),
    "spring": (
        FileNameBonus("contains", ("Application.java",), 15),
        FileNameBonus("contains", ("application.properties", "application.yml"), 10),
    ),
    "django": (FileNameBonus("equals", ("settings.py", "urls.py"), 10),),
}


# ============================================================================
# Fast heuristic scorer tables (file utilities)
# ============================================================================

FAST_PACKAGE_FILES: Final[frozenset[str]] = frozenset(
    {
        "package.json",
        "requirements.txt",
        "pom.xml",
        "build.gradle",
        "Cargo.toml",
        "go.mod",
        "composer.json",
        "Gemfile",
    }
)

FAST_CONFIG_FILE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(p)
    for p in (
        r"\.config\.(js|ts|json)$",
        r"webpack\.config\.",
        r"vite\.config\.",
        r"rollup\.config\.",
        r"babel\.config\.",
        r"jest\.config\.",
        r"vitest\.config\.",
        r"tsconfig\.json$",
        r"\.eslintrc\.",
        r"\.prettierrc",
        r"docker-compose\.",
        r"Dockerfile",
        r"\.env",
        r"\.yml$",
        r"\.yaml$",
    )
)

FAST_ENTRY_POINT_FILES: Final[frozenset[str]] = frozenset(
    {
        "index.js",
        "index.ts",
        "main.js",
        "main.ts",
        "app.js",
        "app.ts",
        "server.js",
        "server.ts",
        "main.py",
        "app.py",
        "__main__.py",
        "Main.java",
        "Program.cs",
        "main.go",
    }
)

FAST_INFRA_NAME_MARKERS: Final[tuple[str, ...]] = (
    "Dockerfile",
    "docker-compose",
    ".github",
    ".gitlab-ci",
)

FAST_TEST_NAME_MARKERS: Final[tuple[str, ...]] = (".test.", ".spec.")
FAST_TEST_DIRS: Final[frozenset[str]] = frozenset({"test", "__tests__"})
FAST_DOC_SUFFIXES: Final[tuple[str, ...]] = (".md", ".txt", ".rst")

ASSET_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\.(png|jpg|jpeg|gif|svg|ico|woff|woff2|ttf|eot)$"
)
SOURCE_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\.(js|ts|py|java|go|rs|cs|php|rb|cpp|c|h)$"
)
DATA_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.(json|xml|yml|yaml|toml|ini)$")

FAST_SCORES: Final[Mapping[str, int]] = {
    "package": 100,
    "entry_point": 80,
    "config": 60,
    "infrastructure": 70,
    "schema": 50,
    "source": 30,
}
FAST_TEST_PENALTY: Final[int] = 20
FAST_TEST_FLOOR: Final[int] = 10

# Built-in ignore rules: directory names matched against any parent segment,
# file suffixes, and exact file names.
IGNORED_DIRS: Final[frozenset[str]] = frozenset(
    {
        "node_modules",
        ".git",
        "dist",
        "build",
        "target",
        ".next",
        ".nuxt",
        "coverage",
        ".nyc_output",
        "__pycache__",
    }
)
IGNORED_SUFFIXES: Final[tuple[str, ...]] = (".pyc",)
IGNORED_FILE_NAMES: Final[frozenset[str]] = frozenset({".DS_Store", "Thumbs.db"})

# Extension (lowercase, without the dot) to language name.
LANGUAGE_BY_EXTENSION: Final[Mapping[str, str]] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "java": "java",
    "go": "go",
    "rs": "rust",
    "cs": "csharp",
    "php": "php",
    "rb": "ruby",
    "cpp": "cpp",
    "c": "c",
    "h": "c",
    "hpp": "cpp",
    "kt": "kotlin",
    "scala": "scala",
    "clj": "clojure",
    "hs": "haskell",
    "elm": "elm",
    "dart": "dart",
    "swift": "swift",
}


# ============================================================================
# Indexer priority file map tables
# ============================================================================

PRIORITY_MAP_SCHEMA_SUFFIXES: Final[tuple[str, ...]] = (".graphql", ".proto")
PRIORITY_MAP_DOCKER_NAME_MARKERS: Final[tuple[str, ...]] = ("Dockerfile", "docker-compose")
PRIORITY_MAP_SCHEMA_DIRS: Final[frozenset[str]] = frozenset({"schema"})
PRIORITY_MAP_DOCKER_DIRS: Final[frozenset[str]] = frozenset({"docker"})
PRIORITY_MAP_DOCKER_FILE_NAMES: Final[frozenset[str]] = frozenset({".dockerignore"})
PRIORITY_MAP_CICD_DIRS: Final[frozenset[str]] = frozenset({".github"})
PRIORITY_MAP_CICD_NAME_MARKERS: Final[tuple[str, ...]] = (
    ".gitlab-ci",
    "jenkins",
    "Jenkinsfile",
    "azure-pipelines",
    "buildspec",
    "cloudbuild",
)


# ============================================================================
# Indexer defaults
# ============================================================================

DEFAULT_MAX_FILES: Final[int] = 10_000
DEFAULT_MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024
DEFAULT_TOP_PRIORITY_LIMIT: Final[int] = 50


# ============================================================================
# Score bounds and category thresholds
# ============================================================================

MIN_SCORE: Final[int] = 0
MAX_SCORE: Final[int] = 200

# Fast heuristic scorer: >=80 critical, >=50 important, >=20 normal.
FAST_THRESHOLDS: Final[CategoryThresholds] = CategoryThresholds(
    critical=80, important=50, normal=20
)
# Detailed priority classifier: >=100 critical, >=60 important, >=20 normal.
DETAILED_THRESHOLDS: Final[CategoryThresholds] = CategoryThresholds(
    critical=100, important=60, normal=20
)
