import pytest

from catalog_pipeline.models import ProductRecord

BASE_URL = "https://books.toscrape.com/"

CATALOG_HTML = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>All products | Books to Scrape</title></head>
<body>
<ol class="row">
  <li>
    <article class="product_pod">
      <div class="image_container">
        <a href="catalogue/a-light-in-the-attic_1000/index.html"><img src="media/cache/2c/da/2cdad67c.jpg" alt="A Light in the Attic" class="thumbnail"></a>
      </div>
      <p class="star-rating Three"><i class="icon-star"></i></p>
      <h3><a href="catalogue/a-light-in-the-attic_1000/index.html" title="A Light in the Attic">A Light in the ...</a></h3>
      <div class="product_price">
        <p class="price_color">£51.77</p>
        <p class="instock availability">
          <i class="icon-ok"></i>
          In stock
        </p>
      </div>
    </article>
  </li>
  <li>
    <article class="product_pod">
      <div class="image_container">
        <a href="catalogue/tipping-the-velvet_999/index.html"><img src="media/cache/26/0c/260c6ae1.jpg" alt="Tipping the Velvet" class="thumbnail"></a>
      </div>
      <p class="star-rating One"><i class="icon-star"></i></p>
      <h3><a href="catalogue/tipping-the-velvet_999/index.html" title="Tipping the Velvet">Tipping the Velvet</a></h3>
      <div class="product_price">
        <p class="price_color">£53.74</p>
        <p class="instock availability">
          <i class="icon-ok"></i>
          In stock
        </p>
      </div>
    </article>
  </li>
</ol>
</body>
</html>
""".encode("utf-8")

EMPTY_CATALOG_HTML = b"""<!DOCTYPE html>
<html><head><meta charset="utf-8"></head><body><p>No products here.</p></body></html>
"""


@pytest.fixture
def catalog_html() -> bytes:
    return CATALOG_HTML


@pytest.fixture
def sample_records():
    return [
        ProductRecord(
            name="A Light in the Attic",
            price=51.77,
            category="Books",
            media_path="https://books.toscrape.com/media/cache/2c/da/2cdad67c.jpg",
            rating="Three",
            availability="In stock",
            url="https://books.toscrape.com/catalogue/a-light-in-the-attic_1000/index.html",
        ),
        ProductRecord(
            name="Sharp Objects",
            price=None,
            description="A psychological thriller.",
            category="Mystery",
            media_path="",
            rating=None,
            availability="Out of stock",
            url="https://books.toscrape.com/catalogue/sharp-objects_997/index.html",
        ),
        ProductRecord(
            name="Soumission",
            price=50.10,
            category="Books",
            media_path="https://books.toscrape.com/media/cache/3e/ef/3eef99c9.jpg",
            rating="One",
            availability="In stock",
            url="https://books.toscrape.com/catalogue/soumission_998/index.html",
        ),
    ]


def output_config(tmp_path):
    return {
        "csv_path": str(tmp_path / "out" / "data.csv"),
        "json_path": str(tmp_path / "out" / "data.json"),
        "yaml_products_path": str(tmp_path / "out" / "books.yaml"),
        "yaml_dir": str(tmp_path / "out" / "products"),
        "text_path": str(tmp_path / "out" / "items.txt"),
    }
