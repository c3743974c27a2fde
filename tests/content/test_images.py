# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for image reference extraction."""

from glimpse.content.images import extract_images


class TestInlineImages:
    def test_inline_image_with_title(self) -> None:
        images = extract_images('![Alt text](/assets/a.png "A title")')

        assert len(images) == 1
        assert images[0].url == "/assets/a.png"
        assert images[0].alt == "Alt text"
        assert images[0].line == 1

    def test_angle_bracket_destination(self) -> None:
        assert extract_images("![x](<https://example.com/a.png>)")[0].url == "https://example.com/a.png"

    def test_plain_link_is_not_an_image(self) -> None:
        assert extract_images("[not an image](/assets/a.png)") == []

    def test_line_offset_is_applied(self) -> None:
        images = extract_images("text\n\n![x](/a.png)", line_offset=7)
        assert images[0].line == 10


class TestReferenceImages:
    def test_label_resolves_to_definition(self) -> None:
        body = "![Figure][fig]\n\n[fig]: https://example.com/f.png"
        assert extract_images(body)[0].url == "https://example.com/f.png"

    def test_labels_are_case_insensitive(self) -> None:
        body = "![Figure][FIG]\n\n[fig]: /assets/f.png"
        assert extract_images(body)[0].url == "/assets/f.png"

    def test_collapsed_reference_uses_alt_as_label(self) -> None:
        body = "![fig][]\n\n[fig]: /assets/f.png"
        assert extract_images(body)[0].url == "/assets/f.png"

    def test_undefined_label_has_empty_url(self) -> None:
        images = extract_images("![x][nowhere]")
        assert len(images) == 1
        assert images[0].url == ""


class TestHtmlImages:
    def test_img_tag_with_alt_before_src(self) -> None:
        images = extract_images('<img alt="Curve" src="/assets/curve.png" width="300">')

        assert images[0].url == "/assets/curve.png"
        assert images[0].alt == "Curve"

    def test_img_tag_without_alt(self) -> None:
        images = extract_images("<img src='/assets/x.png'>")
        assert images[0].url == "/assets/x.png"
        assert images[0].alt == ""

    def test_document_order_within_a_line(self) -> None:
        images = extract_images('<img src="/1.png"> then ![two](/2.png)')
        assert [image.url for image in images] == ["/1.png", "/2.png"]


class TestCodeIsIgnored:
    def test_images_inside_fences_are_skipped(self) -> None:
        body = '```html\n<img src="/c.png">\n![a](/d.png)\n```\n'
        assert extract_images(body) == []

    def test_images_inside_inline_code_are_skipped(self) -> None:
        assert extract_images("Write `![alt](/e.png)` to embed.") == []
