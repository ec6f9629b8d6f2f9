"""
The response wrapper with its metadata: pagination links, totals, rate limits.

The listing operations return the items of one page only. To get the next page,
the same operation is called with the next page number in `ListOptions`;
the links in the response tell whether there are more pages to fetch.
"""
import dataclasses
import datetime
import urllib.parse
from collections.abc import Mapping, Sequence
from typing import Any


@dataclasses.dataclass(frozen=True)
class ListOptions:
    page: int | None = None
    per_page: int | None = None

    def as_params(self) -> dict[str, str]:
        return {key: str(val) for key, val in dataclasses.asdict(self).items() if val}


@dataclasses.dataclass(frozen=True)
class Pages:
    first: str = ''
    prev: str = ''
    next: str = ''
    last: str = ''

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'Pages':
        urls = {key: raw.get(key) or '' for key in ['first', 'prev', 'next', 'last']}
        for key, url in urls.items():
            if not isinstance(url, str):
                raise TypeError(f"The {key!r} page link is not a URL: {url!r}")
        return cls(**urls)


@dataclasses.dataclass(frozen=True)
class LinkAction:
    id: int = 0
    rel: str = ''
    href: str = ''


def _page_of(url: str) -> int:
    query = urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)
    return int(query.get('page', ['1'])[0])


@dataclasses.dataclass(frozen=True)
class Links:
    pages: Pages | None = None
    actions: Sequence[LinkAction] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'Links':
        pages = raw.get('pages')
        return cls(
            pages=Pages.from_raw(pages) if pages is not None else None,
            actions=[LinkAction(id=a.get('id', 0), rel=a.get('rel', ''), href=a.get('href', ''))
                     for a in raw.get('actions') or []],
        )

    @property
    def next_page_url(self) -> str | None:
        if self.pages is None or not self.pages.next:
            return None
        return self.pages.next

    def current_page(self) -> int:
        """
        Guess the current page's number from the links to the adjacent pages.
        """
        if self.pages is None:
            return 1
        if self.pages.prev:
            return _page_of(self.pages.prev) + 1
        if self.pages.next:
            return _page_of(self.pages.next) - 1
        return 1

    def is_last_page(self) -> bool:
        return self.pages is None or not self.pages.last


@dataclasses.dataclass(frozen=True)
class Meta:
    total: int = 0

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'Meta':
        return cls(total=raw.get('total', 0))


@dataclasses.dataclass(frozen=True)
class Rate:
    """ The API rate limits as of the latest response. """
    limit: int = 0
    remaining: int = 0
    reset: datetime.datetime | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> 'Rate':
        reset = headers.get('RateLimit-Reset')
        return cls(
            limit=int(headers.get('RateLimit-Limit') or 0),
            remaining=int(headers.get('RateLimit-Remaining') or 0),
            reset=datetime.datetime.fromtimestamp(int(reset), tz=datetime.timezone.utc) if reset else None,
        )


@dataclasses.dataclass(frozen=True)
class Response:
    """
    The metadata of an API response, for both successful and failed requests.

    The links & meta are only set for the paginated listings.
    """
    status: int
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    links: Links | None = None
    meta: Meta | None = None

    @property
    def rate(self) -> Rate:
        return Rate.from_headers(self.headers)

    @property
    def request_id(self) -> str | None:
        return self.headers.get('x-request-id')

    def paginated(self, raw: Mapping[str, Any]) -> 'Response':
        """ A copy of the response with the pagination metadata from the envelope. """
        links = raw.get('links')
        meta = raw.get('meta')
        return dataclasses.replace(
            self,
            links=Links.from_raw(links) if links is not None else self.links,
            meta=Meta.from_raw(meta) if meta is not None else self.meta,
        )
