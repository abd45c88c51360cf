"""
Tests for page content rendering.
"""

import pytest

from texttools.ia.renderer import (
    HOME_PAGE_INTRO,
    PageRenderer,
    absolute_page_url,
    clean_field_value,
)
from texttools.models import ContentRole, ContentType, PageEntry


@pytest.fixture
def content_types():
    return {
        "How-to": ContentType(
            name="How-to",
            description="Task-oriented steps.",
            external_links="https://example.com/how-to",
            structure="Intro, steps, next steps",
        ),
        "Concept": ContentType(name="Concept", description="Explains an idea."),
    }


@pytest.fixture
def renderer_for(content_types, frozen_clock):
    def factory(pages, **kwargs):
        return PageRenderer(content_types, pages, clock=frozen_clock, **kwargs)
    return factory


class TestRender:

    def test_minimal_page(self, renderer_for):
        page = PageEntry(id="9", content_role="Main content", level1="Guides",
                         title="Guides overview", content_type="Nope", weight=3)
        assert renderer_for([page]).render(page) == (
            "+++\n"
            "title = 'Guides'\n"
            "date = 2024-05-01T09:30:00+00:00\n"
            "weight = 3\n"
            "alwaysopen = false\n"
            "+++\n"
            "\n"
            "## Guides overview\n"
            "\n"
            "### About This Page\n"
            "\n"
            "**Content type**: Unknown\n"
            "\n"
            "Unknown\n"
        )

    def test_front_matter_title_drops_apostrophes(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="Partner's guide")
        assert "title = 'Partners guide'" in renderer_for([page]).render(page)

    def test_content_type_with_link_and_structure(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="Setup", content_type="How-to")
        text = renderer_for([page]).render(page)
        assert "**Content type**: [How-to](https://example.com/how-to)\n\nTask-oriented steps.\n" in text
        assert "**Article Structure**:\n\nIntro, steps, next steps\n" in text

    def test_content_type_without_link(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="Idea", content_type="Concept")
        text = renderer_for([page]).render(page)
        assert "**Content type**: Concept\n\nExplains an idea.\n" in text
        assert "Article Structure" not in text

    def test_planning_fields_before_about(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A", in_phase1="Yes",
                         help_docs_scope="No", doc_description="Overview")
        text = renderer_for([page]).render(page)
        assert "**In Phase 1?**: Yes\n\n**Related to help docs?**: No\n" in text
        assert "In Phase 2?" not in text
        assert text.index("In Phase 1?") < text.index("### About This Page") < text.index("**Description**: Overview")

    def test_group_description_section(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A", group_description="All about A- ")
        assert "### Section Notes\n\nAll about A\n" in renderer_for([page]).render(page)

    def test_ignored_dimension(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A", dimensions="No doc dimension")
        assert "Dimensioned by" not in renderer_for([page]).render(page)

    def test_dimension_with_value(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A", dimensions="Web and mobile")
        assert "**Dimensioned by**: Web and mobile\n" in renderer_for([page]).render(page)

    def test_new_line_fields(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A", existing_links="https://old.example/a",
                         validation="'Users asked for it")
        text = renderer_for([page]).render(page)
        assert "**Links to original docs**:\n\nhttps://old.example/a\n" in text
        assert "**Why is this here?**:\n\nUsers asked for it\n" in text

    def test_page_type(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A", structure_type="Landing")
        assert "**Page type**: Landing\n" in renderer_for([page]).render(page)

    def test_home_page(self, renderer_for):
        page = PageEntry(id="1", content_role="Home page", title="Welcome", in_phase1="Yes")
        text = renderer_for([page]).render(page)
        assert "## Welcome\n" in text
        assert HOME_PAGE_INTRO.strip() in text
        assert "### About This Page" not in text
        assert "In Phase 1?" not in text

    def test_stub_has_only_heading(self, renderer_for):
        stub = PageEntry.stub("Supplemental", ContentRole.SUPPORTIVE, weight=1000)
        text = renderer_for([stub], feedback_url_template="https://fb/{url}").render(stub)
        assert text.endswith("+++\n\n## Supplemental\n")
        assert "weight = 1000" in text
        assert "feedback" not in text

    def test_ends_with_single_newline(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A", content_type="How-to")
        text = renderer_for([page]).render(page)
        assert text.endswith("\n")
        assert not text.endswith("\n\n")


class TestFeedbackLink:

    def test_feedback_line(self, renderer_for):
        page = PageEntry(id="7", content_role="Main content", level1="Guides", level2="Setup")
        renderer = renderer_for(
            [page],
            target_root_url="https://Site.example/Proto",
            version_string="v2",
            feedback_url_template="https://fb.example/?u={url}&v={version}&id={id}",
        )
        expected = (
            "[Give feedback on this page](https://fb.example/?u="
            "https%3a%2f%2fsite.example%2fproto%2fguides%2fsetup%2f&v=v2&id=7)"
        )
        assert f"## Untitled\n\n{expected}\n" in renderer.render(page.model_copy(update={"title": "Untitled"}))

    def test_no_template_no_line(self, renderer_for):
        page = PageEntry(content_role="Main content", level1="A")
        assert "Give feedback" not in renderer_for([page]).render(page)

    def test_absolute_url_of_home(self):
        assert absolute_page_url("_index.md", "https://site.example/proto/") == (
            "https%3a%2f%2fsite.example%2fproto%2f"
        )

    def test_absolute_url_accepts_backslashes(self):
        assert absolute_page_url("Guides\\Setup\\_index.md", "https://s") == (
            "https%3a%2f%2fs%2fguides%2fsetup%2f"
        )


class TestIdLinks:

    @pytest.fixture
    def pages(self):
        return [
            PageEntry(id="2", content_role="Main content", level1="Guides",
                      doc_description="See ID: 4 for setup."),
            PageEntry(id="4", content_role="Main content", level1="Guides", level2="Setup",
                      level3="Sign in, quickly"),
            PageEntry(id="6", content_role="Supportive content", level1="Glossary"),
        ]

    def test_reference_becomes_link(self, renderer_for, pages):
        text = renderer_for(pages).render(pages[0])
        assert "See [Sign in, quickly](/Guides/Setup/Sign-in-quickly/_index.md) for setup." in text

    def test_supportive_target_uses_supplemental_root(self, renderer_for, pages):
        renderer = renderer_for(pages, supplemental_root="Supplemental")
        assert renderer.resolve_id_links("ID: 6") == "[Glossary](/Supplemental/Glossary/_index.md)"

    def test_unknown_id_left_alone(self, renderer_for, pages):
        assert renderer_for(pages).resolve_id_links("See ID: 99.") == "See ID: 99."

    def test_filler_between_marker_and_number(self, renderer_for, pages):
        renderer = renderer_for(pages)
        assert renderer.resolve_id_links("ID:4") == renderer.resolve_id_links("ID - : 4")
        assert renderer.resolve_id_links("ID - : 4").startswith("[Sign in, quickly]")

    def test_repeated_literal(self, renderer_for, pages):
        text = renderer_for(pages).resolve_id_links("ID: 4 and ID: 4")
        assert text.count("[Sign in, quickly]") == 2

    def test_marker_inside_word_ignored(self, renderer_for, pages):
        assert renderer_for(pages).resolve_id_links("VALID: 4") == "VALID: 4"

    def test_filler_does_not_cross_lines(self, renderer_for, pages):
        assert renderer_for(pages).resolve_id_links("ID\n: 4") == "ID\n: 4"

    def test_front_matter_not_linked(self, renderer_for, pages):
        page = PageEntry(id="8", content_role="Main content", level1="Moved to ID: 4",
                         title="Moved to ID: 4", doc_description="Now at ID: 4")
        text = renderer_for(pages + [page]).render(page)
        assert "title = 'Moved to ID: 4'\n" in text
        assert "## Moved to [Sign in, quickly](/Guides/Setup/Sign-in-quickly/_index.md)" in text
        assert "**Description**: Now at [Sign in, quickly]" in text

    def test_first_page_wins_for_repeated_id(self, renderer_for):
        pages = [
            PageEntry(id="3", content_role="Main content", level1="First"),
            PageEntry(id="3", content_role="Main content", level1="Second"),
        ]
        assert renderer_for(pages).resolve_id_links("ID: 3") == "[First](/First/_index.md)"


class TestCleanFieldValue:

    @pytest.mark.parametrize("raw,expected", [
        ("Some text- ", "Some text"),
        ("a- - ", "a"),
        ("'quoted", "quoted"),
        ('"double', "double"),
        ("  spaced  ", "spaced"),
        ("keep-this", "keep-this"),
    ])
    def test_clean(self, raw, expected):
        assert clean_field_value(raw) == expected
