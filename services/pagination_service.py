"""
Pagination bounds and metadata for paged listings
"""

DEFAULT_PER_PAGE = 15
MIN_PER_PAGE = 5
MAX_PER_PAGE = 100
MAX_OFFSET = 2 ** 63 - 1  # largest LIMIT/OFFSET value SQLite and PostgreSQL accept


class PaginationService:

    def clamp(self, requested_size):
        """Page size within [MIN_PER_PAGE, MAX_PER_PAGE]; None means the default"""
        size = DEFAULT_PER_PAGE if requested_size is None else int(requested_size)
        return min(max(size, MIN_PER_PAGE), MAX_PER_PAGE)

    def clamp_page(self, requested_page, per_page):
        """Page number >= 1 whose row offset still fits a 64-bit integer"""
        return min(max(requested_page, 1), MAX_OFFSET // per_page)

    def describe(self, pagination, page_url):
        """
        Reshape a Flask-SQLAlchemy Pagination into response metadata.
        Counts come from the paginator as-is.

        Args:
            pagination: flask_sqlalchemy.pagination.Pagination
            page_url: callable building the URL of a page number
        """
        last_page = max(pagination.pages, 1)
        has_items = pagination.total > 0 and len(pagination.items) > 0

        return {
            'current_page': pagination.page,
            'last_page': last_page,
            'per_page': pagination.per_page,
            'total': pagination.total,
            'from': pagination.first if has_items else None,
            'to': pagination.last if has_items else None,
            'links': {
                'first': page_url(1),
                'last': page_url(last_page),
                'prev': page_url(pagination.prev_num) if pagination.has_prev else None,
                'next': page_url(pagination.next_num) if pagination.has_next else None,
            },
        }
