"""Catalog of the languages the editor offers."""

from typing import NamedTuple


class Language(NamedTuple):
    id: str
    label: str
    extension: str


LANGUAGES: tuple[Language, ...] = (
    Language("javascript", "JavaScript", "js"),
    Language("python", "Python", "py"),
    Language("html", "HTML", "html"),
    Language("css", "CSS", "css"),
    Language("typescript", "TypeScript", "ts"),
    Language("java", "Java", "java"),
    Language("go", "Go", "go"),
    Language("rust", "Rust", "rs"),
    Language("csharp", "C#", "cs"),
)

_BY_ID = {lang.id: lang for lang in LANGUAGES}


def get_language(language_id: str) -> Language | None:
    """Look up a language by id, case-insensitively."""
    return _BY_ID.get((language_id or "").strip().lower())


def default_filename(language: Language) -> str:
    """Name offered when the editor contents are downloaded."""
    return f"codeforge_file.{language.extension}"


def unknown_language_message(language_id: str) -> str:
    return f"Unknown language '{language_id}'. Must be one of: {', '.join(lang.id for lang in LANGUAGES)}"
