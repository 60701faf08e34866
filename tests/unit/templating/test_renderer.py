from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from brochure.config import Config, LogLevel, LoggingConfig
from brochure.exceptions import RenderingFailedError
from brochure.templating import (
    ContextStore,
    TemplateRenderer,
    cleanup_placeholders,
    render_template_string,
)

MakeContext = Callable[..., ContextStore]


@pytest.fixture
def logger(mocker: MockerFixture) -> MagicMock:
    return mocker.MagicMock()


@pytest.fixture
def renderer(logger: MagicMock) -> TemplateRenderer:
    return TemplateRenderer(logger=logger)


class TestVariables:
    def test_present_value(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(projectName="Acme")

        assert renderer.render("{{projectName}}", context) == "Acme"

    def test_absent_value_renders_empty(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        assert renderer.render("[{{projectName}}]", make_context()) == "[]"

    def test_unknown_name_renders_empty(
        self, renderer: TemplateRenderer, make_context: MakeContext, logger: MagicMock
    ) -> None:
        assert renderer.render("a{{notAKey}}b", make_context()) == "ab"
        logger.debug.assert_any_call("Unknown template variable", variable="notAKey")

    def test_formats_non_string_values(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(rssEnabled=False, postsPerPage=12, taxRate=0.2)

        result = renderer.render("{{rssEnabled}} {{postsPerPage}} {{taxRate}}", context)

        assert result == "false 12 0.2"

    def test_system_values(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        template = "(c) {{currentYear}} {{generatorName}} {{generatorVersion}} {{generatedDate}}"

        result = renderer.render(template, make_context())

        assert result == "(c) 2025 Brochure Test 9.9.9 2025-03-14T09:26:53Z"

    def test_values_are_not_reinterpreted(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(tagline="{{author}}", author="Ada")

        assert renderer.render("<{{tagline}}>", context) == "<>"

    def test_text_without_placeholders_is_unchanged(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        text = "body { color: red; }\n"

        assert renderer.render(text, make_context()) == text


class TestDefaults:
    def test_uses_value_when_present(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(tagline="Ship it")

        assert renderer.render("{{tagline|default:Welcome}}", context) == "Ship it"

    def test_uses_literal_when_absent(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        assert renderer.render("{{missing|default:fallback}}", make_context()) == "fallback"

    def test_literal_may_contain_spaces(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        result = renderer.render("{{tagline|default:Welcome to my site}}", make_context())

        assert result == "Welcome to my site"

    def test_literal_naming_a_key_resolves_once(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(projectName="Acme")

        assert renderer.render("{{metaTitle|default:projectName}}", context) == "Acme"

    def test_literal_naming_absent_key_is_verbatim(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        assert (
            renderer.render("{{metaTitle|default:projectName}}", make_context())
            == "projectName"
        )

    def test_indirection_is_not_recursive(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(metaDescription="description")

        result = renderer.render("{{metaTitle|default:metaDescription}}", context)

        assert result == "description"


class TestConditionals:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "AB"),
            (False, "B"),
            (1, "AB"),
            (0, "B"),
            ("yes", "AB"),
            ("", "B"),
            ("False", "B"),
            (["x"], "AB"),
            ([], "B"),
            (None, "B"),
        ],
    )
    def test_if_truthiness(
        self,
        renderer: TemplateRenderer,
        make_context: MakeContext,
        value: object,
        expected: str,
    ) -> None:
        context = make_context(seoEnabled=value)

        assert renderer.render("{{#if seoEnabled}}A{{/if}}B", context) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, "B"), (False, "AB"), ("false", "AB"), (None, "AB")],
    )
    def test_unless_is_inverse(
        self,
        renderer: TemplateRenderer,
        make_context: MakeContext,
        value: object,
        expected: str,
    ) -> None:
        context = make_context(analytics=value)

        assert renderer.render("{{#unless analytics}}A{{/unless}}B", context) == expected

    def test_unknown_condition_name_is_falsy(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        assert renderer.render("{{#if nope}}A{{/if}}B", make_context()) == "B"

    def test_nested_same_kind(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        template = "{{#if seoEnabled}}<{{#if analytics}}GA{{/if}}>{{/if}}"

        both = make_context(seoEnabled=True, analytics=True)
        outer_only = make_context(seoEnabled=True)
        neither = make_context()

        assert renderer.render(template, both) == "<GA>"
        assert renderer.render(template, outer_only) == "<>"
        assert renderer.render(template, neither) == ""

    def test_unless_inside_if(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        template = "{{#if seoEnabled}}{{#unless metaTitle}}untitled{{/unless}}{{/if}}"

        assert renderer.render(template, make_context(seoEnabled=True)) == "untitled"

    def test_body_variables_resolve(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(analytics=True, analyticsId="G-123")

        result = renderer.render("{{#if analytics}}id={{analyticsId}}{{/if}}", context)

        assert result == "id=G-123"


class TestLoops:
    def test_items(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(skills=["a", "b", "c"])

        assert renderer.render("{{#each skills}}{{this}},{{/each}}", context) == "a,b,c,"

    def test_empty_sequence(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(skills=[])

        assert renderer.render("{{#each skills}}{{this}},{{/each}}", context) == ""

    def test_absent_sequence(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        assert renderer.render("{{#each skills}}{{this}},{{/each}}", make_context()) == ""

    def test_non_sequence_renders_empty(
        self, renderer: TemplateRenderer, make_context: MakeContext, logger: MagicMock
    ) -> None:
        context = make_context(skills="Python")

        assert renderer.render("{{#each skills}}{{this}}{{/each}}", context) == ""
        logger.debug.assert_any_call("Loop source is not a sequence", variable="skills")

    def test_index_first_last(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(skills=["x", "y"])
        template = "{{#each skills}}{{@index}}:{{@first}}:{{@last}};{{/each}}"

        assert renderer.render(template, context) == "0:true:false;1:false:true;"

    def test_single_item_is_first_and_last(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(skills=["only"])

        result = renderer.render("{{#each skills}}{{@first}}/{{@last}}{{/each}}", context)

        assert result == "true/true"

    def test_map_fields(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(
            experience=[
                {"role": "Engineer", "years": 3},
                {"role": "Lead", "current": True},
            ]
        )
        template = "{{#each experience}}{{this.role}}/{{this.years}}/{{this.current}};{{/each}}"

        assert renderer.render(template, context) == "Engineer/3/;Lead//true;"

    def test_field_on_scalar_item_is_empty(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(skills=["Python"])

        assert renderer.render("{{#each skills}}[{{this.name}}]{{/each}}", context) == "[]"

    def test_loop_tokens_outside_loop_are_empty(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        result = renderer.render("{{this}}{{@index}}{{@first}}{{@last}}.", make_context())

        assert result == "."

    def test_nested_loops_bind_innermost(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(
            experience=[{"role": "A"}, {"role": "B"}],
            skills=["x", "y"],
        )
        template = (
            "{{#each experience}}{{this.role}}("
            "{{#each skills}}{{@index}}{{this}}{{/each}}"
            "){{/each}}"
        )

        assert renderer.render(template, context) == "A(0x1y)B(0x1y)"

    def test_conditionals_inside_loop_use_context(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(skills=["a", "b"], darkModeEnabled=True)
        template = "{{#each skills}}{{this}}{{#if darkModeEnabled}}*{{/if}}{{/each}}"

        assert renderer.render(template, context) == "a*b*"

    def test_sequence_item_formats_as_list(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(education=[["BSc", "MSc"]])

        result = renderer.render("{{#each education}}{{this}}{{/each}}", context)

        assert result == "['BSc', 'MSc']"


class TestMalformedTemplates:
    def test_stray_closing_tag_is_removed(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        assert renderer.render("a{{/if}}b", make_context()) == "ab"

    def test_unclosed_block_keeps_body(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(author="Ada")

        assert renderer.render("x{{#if seoEnabled}}by {{author}}", context) == "xby Ada"

    def test_unsupported_syntax_is_removed(
        self, renderer: TemplateRenderer, make_context: MakeContext, logger: MagicMock
    ) -> None:
        assert renderer.render("a{{> header}}b{{ author }}c", make_context()) == "abc"
        logger.debug.assert_any_call("Unresolved template tag", tag="{{> header}}")

    def test_leftover_braces_are_cleaned(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        assert renderer.render("{{{{author}}}}", make_context(author="{{")) == ""

    def test_deep_nesting_fails_cleanly(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        depth = 5000
        template = "{{#if seoEnabled}}" * depth + "x" + "{{/if}}" * depth

        with pytest.raises(RenderingFailedError, match="nested too deeply"):
            renderer.render(template, make_context(seoEnabled=True))


class TestRenderer:
    def test_render_is_idempotent(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(projectName="Acme", skills=["a", "b"])
        template = "# {{projectName}}\n{{#each skills}}- {{this}}\n{{/each}}"

        first = renderer.render(template, context)

        assert renderer.render(template, context) == first
        assert first == "# Acme\n- a\n- b\n"

    def test_render_does_not_mutate_context(
        self, renderer: TemplateRenderer, make_context: MakeContext
    ) -> None:
        context = make_context(skills=["a"])
        before = context.to_dict()

        renderer.render("{{#each skills}}{{this}}{{/each}}", context)

        assert context.to_dict() == before

    def test_render_template_string_uses_default_renderer(
        self, make_context: MakeContext
    ) -> None:
        assert render_template_string("{{author}}", make_context(author="Ada")) == "Ada"

    def test_render_template_string_accepts_renderer(
        self, renderer: TemplateRenderer, make_context: MakeContext, logger: MagicMock
    ) -> None:
        render_template_string("{{nope}}", make_context(), renderer=renderer)

        logger.debug.assert_called_once_with("Unknown template variable", variable="nope")

    def test_from_config_builds_renderer(self, make_context: MakeContext) -> None:
        config = Config(logging=LoggingConfig(level=LogLevel.ERROR))

        renderer = TemplateRenderer.from_config(config)

        assert renderer.render("{{author}}", make_context(author="Ada")) == "Ada"


class TestCleanupPlaceholders:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("plain", "plain"),
            ("a{{x}}b", "ab"),
            ("{{{{x}}}}", "}}"),
            ("{{a{{b}}c}}", "c}}"),
            ("{{ }}", ""),
            ("{{unterminated", "{{unterminated"),
            ("}}{{", "}}{{"),
        ],
    )
    def test_cleanup(self, text: str, expected: str) -> None:
        assert cleanup_placeholders(text) == expected
