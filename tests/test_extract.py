"""Tests for blog_digest.processors.extract and normalize."""

import pytest
from bs4 import BeautifulSoup

from blog_digest.errors import ExtractionError
from blog_digest.processors.extract import extract, extract_title, select_main_text
from blog_digest.processors.noise import DEFAULT_NOISE_FILTER, NoiseFilter
from blog_digest.processors.normalize import normalize_lines
from blog_digest.utils.pipeline_config import ExtractionSettings

ANY_LENGTH = ExtractionSettings(min_content_chars=0)


def _page(body: str, head: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


class TestSelectorFallback:
    def test_article_beats_generic_content(self) -> None:
        html = _page(
            '<div class="content"><p>Generic container text.</p></div>'
            "<article><p>Article region text.</p></article>"
        )
        doc = extract(html, settings=ANY_LENGTH)
        assert doc.content == "Article region text."
        assert doc.selector == "article"

    def test_post_content_beats_main(self) -> None:
        html = _page('<main><p>Main text.</p></main><div class="post-content"><p>Post text.</p></div>')
        doc = extract(html, settings=ANY_LENGTH)
        assert doc.content == "Post text."
        assert doc.selector == ".post-content"

    def test_id_selector(self) -> None:
        html = _page('<div id="content"><p>Identified text.</p></div><div><p>Other text.</p></div>')
        doc = extract(html, settings=ANY_LENGTH)
        assert doc.content == "Identified text."
        assert doc.selector == "#content"

    def test_falls_back_to_body(self) -> None:
        html = _page("<div><p>Only body text.</p></div>")
        doc = extract(html, settings=ANY_LENGTH)
        assert doc.content == "Only body text."
        assert doc.selector == "body"

    def test_skips_selector_whose_match_is_empty(self) -> None:
        html = _page('<article><img src="a.png" alt="Picture"></article><main><p>Main text.</p></main>')
        doc = extract(html, settings=ANY_LENGTH)
        assert doc.content == "Main text."
        assert doc.selector == "main"

    def test_concatenates_all_matches_of_winning_selector(self) -> None:
        html = _page('<div class="content"><p>One part.</p></div><div class="content"><p>Two part.</p></div>')
        assert extract(html, settings=ANY_LENGTH).content == "One part. Two part."

    def test_select_main_text_stops_at_first_hit(self) -> None:
        soup = BeautifulSoup(_page("<main>Main.</main><article>Article.</article>"), "html.parser")
        text, selector = select_main_text(soup, ["main", "article"])
        assert text == "Main."
        assert selector == "main"


class TestNoiseRemoval:
    def test_strips_boilerplate_elements(self) -> None:
        html = _page(
            "<nav>Home About</nav><header>Site header</header>"
            "<article>"
            "<script>var tracking = 1;</script>"
            "<p>Real article sentence.</p>"
            '<img src="a.png" alt="An image caption">'
            '<p class="placeholder">Loading widget</p>'
            '<div class="no-script">Please enable JavaScript</div>'
            "<noscript>Your browser does not run scripts</noscript>"
            "<aside>Related links</aside>"
            "<footer>Article footer</footer>"
            "</article>"
            "<footer>Site footer</footer>",
            head="<title>T</title><style>.x { color: red; }</style>",
        )
        assert extract(html, settings=ANY_LENGTH).content == "Real article sentence."

    def test_drops_noise_lines_and_duplicate_lines(self) -> None:
        html = _page(
            "<article>"
            "<p>Keep this line.</p>"
            "<p>This is a PLACEHOLDER line.</p>"
            "<p>Keep this line.</p>"
            "<p>Another line.</p>"
            "</article>"
        )
        assert extract(html, settings=ANY_LENGTH).content == "Keep this line. Another line."

    @pytest.mark.parametrize(
        "body",
        [
            "<article><p>Business Insider tells the innovative stories you want to know</p><p>Body.</p></article>",
            "<main><p>no-script fallback</p><p>Real text.</p></main>",
            '<div><span class="placeholder">x</span><p>Placeholder copy</p><p>Text.</p></div>',
        ],
    )
    def test_output_never_contains_blocklisted_phrase(self, body: str) -> None:
        content = extract(_page(body), settings=ANY_LENGTH).content
        assert content
        assert not DEFAULT_NOISE_FILTER.matches(content)

    def test_phrase_split_across_paragraphs_is_dropped(self) -> None:
        html = _page(
            "<article>"
            "<p>Opening paragraph stays.</p>"
            "<p>Business Insider tells the innovative</p>"
            "<p>stories you want to know</p>"
            "<p>Closing paragraph stays.</p>"
            "</article>"
        )
        content = extract(html, settings=ANY_LENGTH).content
        assert content == "Opening paragraph stays. Closing paragraph stays."
        assert not DEFAULT_NOISE_FILTER.matches(content)

    def test_split_phrase_sharing_a_paragraph_with_body_text(self) -> None:
        html = _page(
            "<article><p>Business Insider tells the innovative</p>"
            "<p>stories you want to know and more body text here.</p></article>"
        )
        content = extract(html, settings=ANY_LENGTH).content
        assert not DEFAULT_NOISE_FILTER.matches(content)

    def test_normalize_lines_drops_phrase_joined_across_lines(self) -> None:
        noise = NoiseFilter(["red fox"])
        assert normalize_lines("A red\nfox ran.\nThe end.", noise=noise) == "The end."

    def test_custom_noise_filter(self) -> None:
        html = _page("<article><p>Subscribe to our newsletter.</p><p>Story text.</p></article>")
        doc = extract(html, settings=ANY_LENGTH, noise=NoiseFilter(["subscribe"]))
        assert doc.content == "Story text."


class TestNormalization:
    def test_collapses_whitespace_inside_lines(self) -> None:
        html = _page("<article><p>Spaced    out\t text</p></article>")
        assert extract(html, settings=ANY_LENGTH).content == "Spaced out text"

    def test_inline_elements_stay_on_one_line(self) -> None:
        html = _page('<article><p>Read <a href="#">more</a> and <b>more</b> here.</p></article>')
        assert extract(html, settings=ANY_LENGTH).content == "Read more and more here."

    def test_block_elements_become_lines(self) -> None:
        html = _page("<article><h2>Heading</h2><p>Body text.</p><ul><li>First</li><li>Second</li></ul></article>")
        assert extract(html, settings=ANY_LENGTH).content == "Heading Body text. First Second"

    def test_line_breaks_split_lines(self) -> None:
        html = _page("<article><p>Same<br>Other<br/>Same</p></article>")
        assert extract(html, settings=ANY_LENGTH).content == "Same Other"

    def test_dedup_is_idempotent(self) -> None:
        text = "a line\n  a   line \nsecond\n\nsecond\nthird"
        once = normalize_lines(text)
        assert once == "a line second third"
        assert normalize_lines(once) == once

    def test_normalize_empty(self) -> None:
        assert normalize_lines("") == ""
        assert normalize_lines(None) == ""


class TestMinimumLength:
    def test_raises_when_content_too_short(self) -> None:
        with pytest.raises(ExtractionError, match="sufficient content"):
            extract(_page("<article><p>Too short.</p></article>"))

    def test_accepts_content_at_threshold(self) -> None:
        text = "x" * 100
        assert extract(_page(f"<article><p>{text}</p></article>")).content == text

    def test_empty_html(self) -> None:
        with pytest.raises(ExtractionError):
            extract("")


class TestTitle:
    def _title(self, html: str, **kwargs) -> str:
        return extract_title(BeautifulSoup(html, "html.parser"), **kwargs)

    def test_prefers_title_tag(self) -> None:
        assert self._title(_page("<h1>Heading</h1>", head="<title> Page  Title </title>")) == "Page Title"

    def test_falls_back_to_h1(self) -> None:
        assert self._title(_page("<h1>First</h1><h1>Second</h1>", head="<title>  </title>")) == "First"

    def test_falls_back_to_og_title(self) -> None:
        head = '<meta property="og:title" content="Open Graph Title">'
        assert self._title(_page("<p>x</p>", head=head)) == "Open Graph Title"

    def test_literal_fallback(self) -> None:
        assert self._title(_page("<p>x</p>")) == "Untitled Article"

    def test_truncates_to_limit(self) -> None:
        assert self._title(_page("", head=f"<title>{'t' * 250}</title>")) == "t" * 200

    def test_heading_inside_header_is_still_used(self) -> None:
        html = _page("<header><h1>Header Title</h1></header><article><p>Body.</p></article>")
        doc = extract(html, settings=ANY_LENGTH)
        assert doc.title == "Header Title"
        assert doc.content == "Body."
