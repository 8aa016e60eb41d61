from .tokenizer import tokenize
from .pagination import parse_cursor, paginate
from .filters import filter_clips, list_clips
from .search import matches_query, search_clips
from .service import ClipCatalog
