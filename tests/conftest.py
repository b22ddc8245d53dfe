# File: tests/conftest.py
import pytest

from link_scout.config import CrawlerConfig
from link_scout.crawler.models import PageData


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a CrawlerConfig suited to a local test server.
    """
    return CrawlerConfig(threads=4, depth=2, timeout=2.0)


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a page with every kind of element the extractor looks for.
    """
    html = """
    <html><body>
      <a href="/link1#section">L1</a>
      <a href="#top">Top</a>
      <a href="http://external.com/x">X</a>
      <script src="js/app.js"></script>
      <script>inline()</script>
      <form action="/login" method="POST">
        <input type="text" name="user">
        <input type="password" name="pass" value="secret">
        <textarea name="comment"></textarea>
      </form>
      <form>
        <input type="hidden" name="token" value="abc">
      </form>
    </body></html>
    """
    return PageData(url="http://example.com/dir/page", content=html)
