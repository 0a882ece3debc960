"""Tests for the per-field extraction strategies.

Each fallback is checked on its own first, then the ordered chains.
"""

import pytest
from bs4 import BeautifulSoup

from scraper.html_utils import (
    IMAGE_STRATEGIES,
    PRICE_STRATEGIES,
    TITLE_STRATEGIES,
    PageDocument,
    absolutize_image_url,
    extract_image,
    extract_price,
    extract_title,
    image_from_first_img,
    image_from_og_meta,
    price_from_meta_tags,
    price_from_price_class,
    price_from_raw_html,
    run_strategies,
    title_from_name_meta,
    title_from_og_meta,
    title_from_title_tag,
)


def _page(html: str) -> PageDocument:
    return PageDocument(soup=BeautifulSoup(html, "html.parser"), html=html)


class TestTitleStrategies:
    """Test title extraction fallbacks."""

    def test_og_title(self):
        page = _page('<head><meta property="og:title" content="  Running Shoe "></head>')
        assert title_from_og_meta(page) == "Running Shoe"

    def test_og_title_missing(self):
        assert title_from_og_meta(_page("<head><title>Shop</title></head>")) is None

    def test_name_meta(self):
        page = _page('<head><meta name="title" content="Lifting Belt"></head>')
        assert title_from_name_meta(page) == "Lifting Belt"

    def test_title_tag(self):
        assert title_from_title_tag(_page("<head><title>\n Chalk Bag \n</title></head>")) == "Chalk Bag"

    def test_empty_title_tag(self):
        assert title_from_title_tag(_page("<head><title>   </title></head>")) is None

    def test_og_title_wins_over_everything(self):
        page = _page(
            '<head><title>Page Title</title>'
            '<meta name="title" content="Meta Title">'
            '<meta property="og:title" content="OG Title"></head>'
        )
        assert extract_title(page) == "OG Title"

    def test_name_meta_beats_title_tag(self):
        page = _page('<head><title>Page Title</title><meta name="title" content="Meta Title"></head>')
        assert extract_title(page) == "Meta Title"

    def test_blank_og_title_falls_through(self):
        page = _page('<head><meta property="og:title" content="   "><title>Page Title</title></head>')
        assert extract_title(page) == "Page Title"

    def test_default_name(self):
        assert extract_title(_page("<html><body><p>nothing here</p></body></html>")) == "Produkt"

    def test_strategy_order(self):
        assert TITLE_STRATEGIES == [title_from_og_meta, title_from_name_meta, title_from_title_tag]


class TestImageStrategies:
    """Test image extraction fallbacks."""

    def test_og_image(self):
        page = _page('<meta property="og:image" content="https://cdn.example.com/a.jpg"><img src="/b.jpg">')
        assert image_from_og_meta(page) == "https://cdn.example.com/a.jpg"
        assert extract_image(page) == "https://cdn.example.com/a.jpg"

    def test_first_img(self):
        page = _page('<body><img src="/first.jpg"><img src="/second.jpg"></body>')
        assert image_from_first_img(page) == "/first.jpg"

    def test_only_first_img_is_considered(self):
        page = _page('<body><img alt="no source"><img src="/second.jpg"></body>')
        assert image_from_first_img(page) is None
        assert extract_image(page) == ""

    def test_no_image(self):
        assert extract_image(_page("<body><p>text</p></body>")) == ""

    def test_protocol_relative_og_image(self):
        page = _page('<meta property="og:image" content="//cdn.example.com/shoe.png">')
        assert extract_image(page) == "https://cdn.example.com/shoe.png"

    def test_protocol_relative_img(self):
        page = _page('<body><img src="//cdn.example.com/shoe.png"></body>')
        assert extract_image(page) == "https://cdn.example.com/shoe.png"

    @pytest.mark.parametrize(
        "src,expected",
        [
            ("//a.b/c.jpg", "https://a.b/c.jpg"),
            ("http://a.b/c.jpg", "http://a.b/c.jpg"),
            ("/relative.jpg", "/relative.jpg"),
        ],
    )
    def test_absolutize(self, src, expected):
        assert absolutize_image_url(src) == expected

    def test_strategy_order(self):
        assert IMAGE_STRATEGIES == [image_from_og_meta, image_from_first_img]


class TestPriceStrategies:
    """Test price extraction fallbacks."""

    def test_itemprop_price(self):
        page = _page('<meta itemprop="price" content="49.95">')
        assert price_from_meta_tags(page) == "49.95"

    def test_meta_selector_priority(self):
        page = _page(
            '<meta name="price" content="3.00">'
            '<meta property="product:price:amount" content="2.00">'
            '<meta itemprop="price" content="1.00">'
        )
        assert price_from_meta_tags(page) == "1.00"

    def test_product_price_amount_before_name_price(self):
        page = _page('<meta name="price" content="3.00"><meta property="product:price:amount" content="2.00">')
        assert price_from_meta_tags(page) == "2.00"

    def test_price_class_element(self):
        page = _page('<div class="product-price-box"> €19,99 </div><span class="price">5</span>')
        assert price_from_price_class(page) == " €19,99 "

    def test_price_class_empty_text(self):
        assert price_from_price_class(_page('<div class="price"></div>')) is None

    def test_raw_html_regex(self):
        assert price_from_raw_html(_page("<p>Only €24,50 today</p>")) == "24,50"

    def test_raw_html_regex_takes_first_number(self):
        assert price_from_raw_html(_page("<p>Buy 2 for $30.00</p>")) == "2"

    def test_raw_html_regex_caps_integer_digits(self):
        assert price_from_raw_html(_page("<p>Artikel 12345</p>")) == "123"

    def test_meta_wins_over_class_and_regex(self):
        page = _page('<meta itemprop="price" content="10.00"><span class="price">20,00</span><p>$30.00</p>')
        assert extract_price(page) == 10.0

    def test_class_wins_over_regex(self):
        page = _page('<p>Modell 7</p><span class="sale-price">20,00 €</span>')
        assert extract_price(page) == 20.0

    def test_no_price_source_is_zero(self):
        page = _page("<html><head><title>Shirt</title></head><body><p>Sold out</p></body></html>")
        assert extract_price(page) == 0.0

    def test_unparsable_price_is_zero(self):
        page = _page('<meta itemprop="price" content="auf Anfrage">')
        assert extract_price(page) == 0.0

    def test_strategy_order(self):
        assert PRICE_STRATEGIES == [price_from_meta_tags, price_from_price_class, price_from_raw_html]


class TestRunStrategies:
    """Test the generic first-match runner."""

    def test_first_non_empty_wins(self):
        calls = []

        def empty(page):
            calls.append("empty")
            return ""

        def hit(page):
            calls.append("hit")
            return "value"

        def never(page):
            calls.append("never")
            return "other"

        assert run_strategies([empty, hit, never], _page("")) == "value"
        assert calls == ["empty", "hit"]

    def test_all_miss(self):
        assert run_strategies([lambda p: None, lambda p: ""], _page("")) is None
