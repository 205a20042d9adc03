"""Constants for GitHub service."""

GITHUB_API_URL = "https://api.github.com"
GITHUB_WEB_URL = "https://github.com"

# Stable REST v3 media type
GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"

# Page sizes (single page each, no pagination follow-through)
REPOS_PER_PAGE = 100
EVENTS_PER_PAGE = 30
COMMITS_PER_PAGE = 100

# Aggregation shape
TOP_LANGUAGES_LIMIT = 8
TIMELINE_DAYS = 30
SHORT_SHA_LENGTH = 7

PUSH_EVENT_TYPE = "PushEvent"
UNKNOWN_AUTHOR = "Unknown"

# Standard GitHub language colors (subset of most common)
# Used for visualization in the frontend language breakdown
GITHUB_LANGUAGE_COLORS: dict[str, str] = {
    "Python": "#3572A5",
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Java": "#b07219",
    "C++": "#f34b7d",
    "C": "#555555",
    "C#": "#178600",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "Ruby": "#701516",
    "PHP": "#4F5D95",
    "Swift": "#F05138",
    "Kotlin": "#A97BFF",
    "Scala": "#c22d40",
    "Shell": "#89e051",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "SCSS": "#c6538c",
    "Vue": "#41b883",
    "Svelte": "#ff3e00",
    "Dockerfile": "#384d54",
    "Makefile": "#427819",
    "SQL": "#e38c00",
    "R": "#198CE7",
    "Jupyter Notebook": "#DA5B0B",
    "Lua": "#000080",
    "Dart": "#00B4AB",
    "Haskell": "#5e5086",
    "Elixir": "#6e4a7e",
    "Zig": "#ec915c",
}

DEFAULT_LANGUAGE_COLOR = "#8b8b8b"
