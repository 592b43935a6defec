import logging
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models import db
from models.category import Category
from services.library_state import LibraryStateTracker

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Container for import operation results."""
    imported: List[dict] = field(default_factory=list)
    skipped: List[dict] = field(default_factory=list)
    errors: List[dict] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.imported)

    @property
    def read_count(self) -> int:
        return sum(1 for item in self.imported if item['is_read'])

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def total_processed(self) -> int:
        return self.imported_count + self.skipped_count + self.error_count


class BookListImporter:
    """
    Bulk import of a headerless booklist CSV with nine columns:
    title, author first name, author last name, price, category,
    sub category, publication year, translator, read (YES/NO).
    """

    COLUMNS = [
        'title', 'author_first_name', 'author_last_name', 'price', 'category',
        'sub_category', 'publication_year', 'translator', 'read_status',
    ]
    DEFAULT_RATING = 4

    def __init__(self, db_session=None, default_rating: Optional[int] = None):
        self.db = db_session or db.session
        self.tracker = LibraryStateTracker(self.db)
        self.default_rating = default_rating or self.DEFAULT_RATING
        self.results = ImportResult()
        self._categories: Dict[str, Category] = {}

    def import_file(self, file_path: str, dry_run: bool = False) -> ImportResult:
        """Main entry point for booklist import."""
        df = self.parse_csv(file_path)
        self._categories = {c.name: c for c in self.db.query(Category).all()}

        for index, row in df.iterrows():
            line = index + 1
            title = self.clean_text(row.get('title'))
            if not title:
                self.results.skipped.append({'row': line, 'title': None, 'reason': 'Missing title'})
                continue

            category_name = self.clean_text(row.get('category'))
            category = self._categories.get(category_name)
            if category is None:
                self.results.skipped.append({
                    'row': line,
                    'title': title,
                    'reason': f'Category not found: {category_name}'
                })
                continue

            try:
                fields = self.build_book_fields(row, category)
                if not dry_run:
                    self.tracker.create_book(**fields)
                self.results.imported.append({'row': line, 'title': title, 'is_read': fields['is_read']})
            except Exception as e:
                logger.error(f"Failed to import row {line} ({title}): {e}")
                self.results.errors.append({'row': line, 'title': title, 'error': str(e)})

        logger.info(
            f"Booklist import finished: {self.results.imported_count} imported, "
            f"{self.results.skipped_count} skipped, {self.results.error_count} errors"
        )
        return self.results

    def parse_csv(self, file_path: str) -> pd.DataFrame:
        """Parse CSV file with encoding fallback."""
        options = dict(
            header=None,
            names=self.COLUMNS,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            skip_blank_lines=True,
            on_bad_lines='skip',
        )
        try:
            return pd.read_csv(file_path, encoding='utf-8', **options)
        except UnicodeDecodeError:
            return pd.read_csv(file_path, encoding='latin-1', **options)

    def build_book_fields(self, row: pd.Series, category: Category) -> dict:
        is_read = self.clean_text(row.get('read_status')).upper() == 'YES'
        return {
            'title': self.clean_text(row.get('title')),
            'author_first_name': self.clean_text(row.get('author_first_name')) or None,
            'author_last_name': self.clean_text(row.get('author_last_name')) or None,
            'price': self.parse_float(row.get('price')),
            'category_id': category.id,
            'sub_category': self.clean_text(row.get('sub_category')) or None,
            'publication_year': self.parse_int(row.get('publication_year')),
            'translator': self.clean_text(row.get('translator')) or None,
            'is_read': is_read,
            'rating': self.default_rating if is_read else None,
        }

    def clean_text(self, value) -> str:
        if value is None or pd.isna(value):
            return ''
        return str(value).strip().strip('"').strip()

    def parse_int(self, value) -> Optional[int]:
        """Safely parse integer value."""
        text = self.clean_text(value)
        if not text:
            return None
        try:
            return int(float(text))
        except (ValueError, TypeError):
            return None

    def parse_float(self, value) -> Optional[float]:
        text = self.clean_text(value).replace(',', '.')
        if not text:
            return None
        try:
            return float(text)
        except (ValueError, TypeError):
            return None
