import pytest

from brochure.enums import SYSTEM_KEYS, ContextKey, TemplateCategory, TemplateFeature


class TestContextKey:
    def test_key_set_is_closed(self) -> None:
        assert len(ContextKey) == 49

    def test_values_are_placeholder_names(self) -> None:
        assert ContextKey.PROJECT_NAME == "projectName"
        assert ContextKey.CURRENT_YEAR == "currentYear"

    def test_every_key_has_a_display_name(self) -> None:
        assert all(key.display_name for key in ContextKey)

    def test_required_keys(self) -> None:
        assert ContextKey.required_keys() == (
            ContextKey.PROJECT_NAME,
            ContextKey.DESCRIPTION,
            ContextKey.AUTHOR,
        )

    def test_system_keys(self) -> None:
        assert {key for key in ContextKey if key.is_system} == SYSTEM_KEYS
        assert len(SYSTEM_KEYS) == 4

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("skills", ContextKey.SKILLS),
            ("generatorName", ContextKey.GENERATOR_NAME),
            ("Skills", None),
            ("skills ", None),
            ("", None),
        ],
    )
    def test_from_name(self, name: str, expected: ContextKey | None) -> None:
        assert ContextKey.from_name(name) is expected


class TestTemplateCategory:
    def test_display_names(self) -> None:
        assert TemplateCategory.ECOMMERCE.display_name == "E-commerce"
        assert TemplateCategory("landing-page") is TemplateCategory.LANDING_PAGE

    def test_features_use_camel_case(self) -> None:
        assert TemplateFeature("contactForm") is TemplateFeature.CONTACT_FORM
        assert len(TemplateFeature) == 15
