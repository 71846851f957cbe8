"""
Compass - routing sample

Loads the route definitions in sample_config/, then matches a few paths
and generates a few URLs.
Run with: python sample.py
"""

import logging
from pathlib import Path

from compass import MissingMandatoryParametersError, RequestContext, Router
from compass.loader import create_loader

# =============================================================================
# Setup
# =============================================================================

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
logger = logging.getLogger("compass.sample")

CONFIG_DIR: Path = Path(__file__).parent / "sample_config"

router = Router(
    loader=create_loader(CONFIG_DIR),
    resource="routing.yml",
    context=RequestContext(host="example.com"),
)
router.warm()


# =============================================================================
# Matching
# =============================================================================

for uri in ("/", "/about", "/contacts", "/blog", "/blog/3", "/blog/2024-05/hello", "/a/b"):
    logger.info("match(%r) -> %r", uri, router.match(uri))


# =============================================================================
# Generation
# =============================================================================

logger.info("%s", router.generate("static_page"))
logger.info("%s", router.generate("static_page", {"page": "contacts"}))
logger.info("%s", router.generate("static_page", {"page": "contacts"}, True))
logger.info("%s", router.generate("blog_index", {"page": 2, "sort": "date"}))
logger.info(
    "%s",
    router.generate("blog_post", {"year": "2024", "month": "05", "slug": "hello world"}),
)

try:
    router.generate("blog_post", {"slug": "hello"})
except MissingMandatoryParametersError as exc:
    logger.warning("%s", exc)
