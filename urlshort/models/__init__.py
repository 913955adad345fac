from urlshort.models.short_url_model import ShortURLModel
from urlshort.models.path_table import PathMapping, PathTable


__all__ = [
    'ShortURLModel',
    'PathMapping',
    'PathTable',
]
