# apps/habits/domain/markdown_import.py
"""
Import nawyków z markdowna.

    # Zdrowie
    ## Rano
    - Szklanka wody

"# X" = kategoria, "## Y" = podkategoria ("X > Y"), "- " / "* " = nawyk.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

HEADER_RE = re.compile(r'^(#{1,6})\s+(.+)$')
LIST_PREFIXES = ('- ', '* ')
COMMENT_PREFIXES = ('//', '<!--')
BARE_BULLETS = ('-', '*')
SUBCATEGORY_SEPARATOR = ' > '


@dataclass
class ParsedCategory:
    name: str
    sort_order: int


@dataclass
class ParsedHabit:
    name: str
    category_name: Optional[str]
    sort_order: int


@dataclass
class ParseResult:
    categories: List[ParsedCategory] = field(default_factory=list)
    habits: List[ParsedHabit] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    total_lines: int = 0
    skipped_lines: int = 0

    @property
    def stats(self) -> dict:
        return {
            'totalLines': self.total_lines,
            'categoriesFound': len(self.categories),
            'habitsFound': len(self.habits),
            'skippedLines': self.skipped_lines,
        }


def parse_markdown_habits(content: str) -> ParseResult:
    lines = content.split('\n')
    result = ParseResult(total_lines=len(lines))
    seen_categories = set()

    current_category = None
    current_subcategory = None

    def add_category(name):
        if name not in seen_categories:
            seen_categories.add(name)
            result.categories.append(ParsedCategory(name=name, sort_order=len(result.categories)))

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()

        if not line or line.startswith(COMMENT_PREFIXES):
            result.skipped_lines += 1
            continue

        header = HEADER_RE.match(line)
        if header:
            level = len(header.group(1))
            text = header.group(2).strip()
            if level == 1:
                current_category = text
                current_subcategory = None
                add_category(current_category)
            elif level == 2:
                current_subcategory = text
                if current_category:
                    add_category(f"{current_category}{SUBCATEGORY_SEPARATOR}{text}")
                else:
                    add_category(text)
            # Głębsze nagłówki (###...) ignorujemy, nie zmieniają kategorii
            continue

        # Samo "-" to pusty punkt listy
        if line in BARE_BULLETS or line.startswith(LIST_PREFIXES):
            name = line[2:].strip()
            if not name:
                result.errors.append(f"Line {line_number}: Empty habit name")
                result.skipped_lines += 1
                continue

            category_name = None
            if current_category and current_subcategory:
                category_name = f"{current_category}{SUBCATEGORY_SEPARATOR}{current_subcategory}"
            elif current_category or current_subcategory:
                category_name = current_category or current_subcategory

            result.habits.append(ParsedHabit(
                name=name,
                category_name=category_name,
                sort_order=len(result.habits),
            ))
            continue

        # Zwykły tekst - pomijamy
        result.skipped_lines += 1

    return result


def validate_markdown_content(content) -> List[str]:
    """Zwraca listę błędów (pusta = OK)."""
    if not content or not isinstance(content, str):
        return ['Content is required and must be a string']
    if not content.strip():
        return ['Content cannot be empty']

    has_habit = any(line.strip().startswith(LIST_PREFIXES) for line in content.split('\n'))
    if not has_habit:
        return ['No habits found. Habits should be on lines starting with "- "']
    return []
