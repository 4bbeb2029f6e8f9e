"""Path patterns for files whose full content is not worth sending to the model.

Pattern kinds:
- ``dir/``   matches when the path contains that directory segment
- ``*.ext``  matches the end of the file name
- ``name``   matches the file name exactly, or the tail of the path
"""

NON_MEANINGFUL_FILE_PATTERNS: tuple[str, ...] = (
    # Package managers
    "package-lock.json",
    "package.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "composer.lock",
    "pipfile.lock",
    "poetry.lock",
    "cargo.lock",
    "gemfile.lock",
    "go.sum",
    # Build artifacts and vendored dependencies
    "node_modules/",
    "vendor/",
    "target/",
    "build/",
    "dist/",
    ".next/",
    ".nuxt/",
    # IDE and editor files
    ".vscode/",
    ".idea/",
    "*.iml",
    # Version control
    ".git/",
    ".gitignore",
    ".gitattributes",
    ".gitmodules",
    ".gitkeep",
    # Minified and bundled output
    "*.min.js",
    "*.min.css",
    "*.bundle.js",
    "*.chunk.js",
    # Binary and media
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.ico",
    "*.pdf",
    "*.zip",
    "*.tar.gz",
    # Generated documentation
    "docs/api/",
    "coverage/",
    # Prose
    "*.md",
    "*.txt",
    "*.rst",
    "*.adoc",
    "readme",
    "license",
    "changelog",
    "contributing",
    # Bundler configs
    "webpack.config.js",
    "vite.config.js",
    "rollup.config.js",
    # Tests and test runners
    "*.test.js",
    "*.test.ts",
    "*.test.jsx",
    "*.test.tsx",
    "*.spec.js",
    "*.spec.ts",
    "*.spec.jsx",
    "*.spec.tsx",
    "*.snap",
    "__tests__/",
    "__mocks__/",
    "test/",
    "tests/",
    "e2e/",
    "cypress/",
    "playwright.config.ts",
    "playwright.config.js",
    "jest.config.js",
    "jest.config.ts",
    "vitest.config.js",
    "vitest.config.ts",
    "karma.conf.js",
    "protractor.conf.js",
    # Storybook
    "*.stories.ts",
    "*.stories.tsx",
    "*.stories.js",
    "*.stories.jsx",
    "*.story.ts",
    "*.story.tsx",
    "*.story.js",
    "*.story.jsx",
    ".storybook/",
    # Stylesheets
    "*.css",
    "*.scss",
    "*.sass",
    "*.less",
    "*.styl",
    "postcss.config.js",
    "postcss.config.ts",
    "tailwind.config.js",
    "tailwind.config.ts",
    # Type declarations
    "*.d.ts",
    # Environment files
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.test",
    # Locale data
    "*.json",
    "locales/",
    "i18n/",
    "translations/",
    # Migrations and seeds
    "migrations/",
    "seeds/",
    "*.migration.ts",
    "*.seed.ts",
    # CI/CD and infrastructure
    ".github/",
    ".gitlab-ci.yml",
    ".travis.yml",
    "azure-pipelines.yml",
    "jenkinsfile",
    "dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    ".dockerignore",
    ".kubernetes/",
    "k8s/",
    "helm/",
    # Linters and formatters
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.json",
    ".prettierrc",
    ".prettierrc.js",
    ".prettierrc.json",
    ".editorconfig",
    "biome.json",
    ".stylelintrc",
    ".htmlhintrc",
    # Compiler configs
    "tsconfig.json",
    "tsconfig.build.json",
    "tsconfig.node.json",
    "tsconfig.app.json",
    "jsconfig.json",
    ".babelrc",
    "babel.config.js",
    # Package manager configs
    ".npmrc",
    ".yarnrc",
    ".yarnrc.yml",
    "pnpm-workspace.yaml",
    ".nvmrc",
    ".node-version",
    # Python
    "requirements.txt",
    "requirements/",
    "setup.py",
    "pyproject.toml",
    "pipfile",
    "__pycache__/",
    "*.pyc",
    # Java
    "pom.xml",
    "build.gradle",
    "gradle/",
    ".gradle/",
    # Logs, caches and scratch space
    "*.log",
    "logs/",
    ".cache/",
    "tmp/",
    "temp/",
    ".temp/",
)

_LOCKFILE_SUFFIXES = (".json", ".yaml", ".yml")


def is_non_meaningful_file(file_path: str) -> bool:
    """True when *file_path* is generated, vendored, config or otherwise low-signal."""
    path = file_path.lower()
    base_name = path.rsplit("/", 1)[-1]
    if "lock" in base_name and base_name.endswith(_LOCKFILE_SUFFIXES):
        return True
    return any(_matches(pattern, path, base_name) for pattern in NON_MEANINGFUL_FILE_PATTERNS)


def _matches(pattern: str, path: str, base_name: str) -> bool:
    if pattern.endswith("/"):
        return f"/{path}".find(f"/{pattern}") != -1
    if pattern.startswith("*."):
        return base_name.endswith(pattern[1:])
    return base_name == pattern or path.endswith(f"/{pattern}")
