"""Tests for HTML table rendering."""

from mflow.core.columns import ColumnRegistry
from mflow.core.grid import build_grid
from mflow.services.html_renderer import HtmlRenderer, render_html, save_html


def make_grid(lines, header="[A] ab [B]"):
    return build_grid(ColumnRegistry.from_header(header), lines)


class TestRenderTable:
    """Tests for HtmlRenderer.render_table."""

    def test_header_cells(self):
        table = HtmlRenderer().render_table(make_grid(["a"]))

        assert '<th class="col-0">A</th>' in table
        assert '<th class="col-1">ab</th>' in table
        assert '<th class="col-2">B</th>' in table

    def test_work_cell(self):
        table = HtmlRenderer().render_table(make_grid(["a"]))
        assert '<td class="work col-0 row-0" style="">1, a</td>' in table

    def test_highlighted_work_cell(self):
        table = HtmlRenderer().render_table(make_grid(["#hot"]))
        assert 'style="background-color:yellow;"' in table

    def test_arrow_cell(self):
        table = HtmlRenderer().render_table(make_grid(["a", "[B]go"]))
        assert '<td class="arrow col-1 row-0" style="">⇒[go]⇒</td>' in table

    def test_arrow_in_work_lane_is_boxed(self):
        grid = make_grid(["a", "[C]"], header="[A] ab [B] bc [C]")
        table = HtmlRenderer().render_table(grid)
        assert "border-top:1px solid black; border-bottom:1px solid black;" in table

    def test_empty_cells_marked_left_until_first_cell(self):
        grid = make_grid(["a", "[B]", "b", "b2"])
        table = HtmlRenderer().render_table(grid)

        assert '<td class="empty work left col-0 row-1"></td>' in table
        assert '<td class="empty arrow left col-1 row-1"></td>' in table

    def test_trailing_empty_cells_not_left(self):
        table = HtmlRenderer().render_table(make_grid(["a"]))
        assert '<td class="empty arrow col-1 row-0"></td>' in table

    def test_detail_adds_tooltip(self):
        table = HtmlRenderer().render_table(make_grid(["save (to disk)"]))

        assert 'onmouseover="showTip(event, &quot;to disk&quot;)"' in table
        assert 'onmouseout="hideTip()"' in table
        assert '<a href="#"' in table
        assert "1, save</a>" in table

    def test_labels_are_escaped(self):
        table = HtmlRenderer().render_table(make_grid(["<b>bold</b> & co"]))
        assert "&lt;b&gt;bold&lt;/b&gt; &amp; co" in table


class TestRenderPage:
    """Tests for full page rendering."""

    def test_page_structure(self):
        page = render_html("post", [make_grid(["a"])])

        assert page.startswith("<!DOCTYPE html>")
        assert "<title>post</title>" in page
        assert '<meta charset="utf-8">' in page
        assert "function showTip" in page
        assert '<div id="tip"></div>' in page
        assert "<h1>post</h1>" in page
        assert page.count("<table>") == 1

    def test_trailing_text_appended_verbatim(self):
        page = render_html("post", [make_grid(["a"])], "Posting flow<br>")
        assert page.endswith("</table>\nPosting flow<br>")

    def test_flow_titles_for_multiple_flows(self):
        first = make_grid(["a"])
        first.title = "Login"
        second = make_grid(["b"])
        second.title = "Logout"

        page = render_html("session", [first, second])
        assert "<h2>Login</h2>" in page
        assert "<h2>Logout</h2>" in page
        assert page.count("<table>") == 2

    def test_single_flow_has_no_subtitle(self):
        grid = make_grid(["a"])
        grid.title = "post"
        assert "<h2>" not in render_html("post", [grid])

    def test_custom_highlight_color(self):
        page = HtmlRenderer(highlight_color="orange").render("t", [make_grid(["#a"])])
        assert "background-color:orange;" in page


class TestSaveHtml:
    """Tests for save_html."""

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "out" / "post.html"
        save_html("<p>ok</p>", path)
        assert path.read_text(encoding="utf-8") == "<p>ok</p>"
