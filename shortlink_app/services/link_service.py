import logging
from typing import List, Optional

from shortlink_app.config import settings
from shortlink_app.exceptions import LinkExistsError, LinkNotFoundError
from shortlink_app.models.link import Link, normalize_url, validate_slug
from shortlink_app.services.slug_generator import RandomSlugStrategy, SlugStrategy
from shortlink_app.store.strategies import KeyValueStore

logger = logging.getLogger("shortlink.links")

LINKS_INDEX_KEY = "links"


def link_key(slug: str) -> str:
    return f"link:{slug}"


class LinkService:
    """
    Link service with dependency injection for the key-value store.

    Layout in the store:
    - ``link:<slug>`` hash with ``url`` and ``clicks`` fields
    - ``links`` list of slugs, newest first, used for listing
    """

    def __init__(
        self,
        store: KeyValueStore,
        slug_strategy: Optional[SlugStrategy] = None
    ):
        """
        Initialize link service with dependencies.

        Args:
            store: Key-value store strategy
            slug_strategy: Generator for links created without a slug
        """
        self.store = store
        self.slug_strategy = slug_strategy or RandomSlugStrategy(
            length=settings.slug_length,
            max_retries=settings.max_retries
        )

    async def slug_exists(self, slug: str) -> bool:
        # A stray counter hash without url does not hold the slug
        return "url" in await self.store.get_hash(link_key(slug))

    async def create_link(self, url: str, slug: Optional[str] = None) -> Link:
        """Create a new link.

        The slug is validated, or generated when not given; the URL is
        normalized. Raises LinkExistsError when the slug is already used.
        """
        if slug:
            slug = validate_slug(slug)
        else:
            slug = await self.slug_strategy.generate(self.slug_exists)

        link = Link(slug=slug, url=normalize_url(url), clicks=0)

        if await self.slug_exists(slug):
            raise LinkExistsError(f"Link {slug} already exists")

        await self.store.set_hash(link_key(slug), link.to_hash())
        await self.store.add_to_list(LINKS_INDEX_KEY, slug)

        logger.info('Created link "%s"', slug)
        return link

    async def get_link(self, slug: str) -> Link:
        values = await self.store.get_hash(link_key(slug))
        # A hash without url is a stray counter left by a racing redirect
        if "url" not in values:
            raise LinkNotFoundError(f"Link {slug} not found")
        return Link.from_hash(slug, values)

    async def list_slugs(self) -> List[str]:
        return await self.store.get_list(LINKS_INDEX_KEY)

    async def list_links(self) -> List[Link]:
        """Get every indexed link, newest first.

        Slugs whose hash is missing or unreadable are logged and skipped.
        """
        links = []
        for slug in await self.list_slugs():
            try:
                links.append(await self.get_link(slug))
            except (LinkNotFoundError, ValueError) as e:
                logger.error("Failed to get link for %s: %s", slug, e)
        return links

    async def delete_link(self, slug: str) -> None:
        """Delete a link and drop it from the index."""
        existed = await self.store.delete(link_key(slug))
        await self.store.remove_from_list(LINKS_INDEX_KEY, slug)
        if not existed:
            raise LinkNotFoundError(f"Link {slug} not found")
        logger.info('Deleted link "%s"', slug)

    async def resolve_redirect(self, slug: str) -> str:
        """
        Get the destination for a redirect and count the click.

        The increment is a single HINCRBY, so concurrent redirects are
        counted by the store without any locking here.
        """
        link = await self.get_link(slug)
        await self.store.increment_hash_field(link_key(slug), "clicks")
        return link.url
