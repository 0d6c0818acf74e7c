from conftest import CapabilityProvider, make_project_instance

from razorsnap.model import RazorConfiguration, RazorLanguageVersion
from razorsnap.selector import ConfigurationSelector

CONFIG_A = RazorConfiguration("A", RazorLanguageVersion.VERSION_2_1)
CONFIG_B = RazorConfiguration("B", RazorLanguageVersion.VERSION_3_0)
FALLBACK_CONFIG = RazorConfiguration("Fallback", RazorLanguageVersion.VERSION_1_1)


class TestConfigurationSelector:
    def test_first_matching_provider_wins(self) -> None:
        first = CapabilityProvider("RazorExtension", CONFIG_A)
        second = CapabilityProvider("RazorExtension", CONFIG_B)
        fallback = CapabilityProvider("RazorExtension", FALLBACK_CONFIG)
        selector = ConfigurationSelector([first, second], fallback)

        result = selector.resolve(["RazorExtension"], make_project_instance({}))

        assert result == CONFIG_A
        assert second.num_calls == 0
        assert fallback.num_calls == 0

    def test_order_is_significant(self) -> None:
        provider_a = CapabilityProvider("RazorExtension", CONFIG_A)
        provider_b = CapabilityProvider("RazorExtension", CONFIG_B)
        fallback = CapabilityProvider("Never", FALLBACK_CONFIG)
        project_instance = make_project_instance({})

        assert ConfigurationSelector([provider_a, provider_b], fallback).resolve(["RazorExtension"], project_instance) == CONFIG_A
        assert ConfigurationSelector([provider_b, provider_a], fallback).resolve(["RazorExtension"], project_instance) == CONFIG_B

    def test_non_matching_providers_are_skipped(self) -> None:
        selector = ConfigurationSelector(
            [CapabilityProvider("Other", CONFIG_A), CapabilityProvider("RazorExtension", CONFIG_B)], CapabilityProvider("Never", None)
        )
        assert selector.resolve(["RazorExtension"], make_project_instance({})) == CONFIG_B

    def test_fallback_is_used_when_no_provider_matches(self) -> None:
        fallback = CapabilityProvider("RazorExtension", FALLBACK_CONFIG)
        selector = ConfigurationSelector([CapabilityProvider("Other", CONFIG_A)], fallback)

        assert selector.resolve(["RazorExtension"], make_project_instance({})) == FALLBACK_CONFIG
        assert fallback.num_calls == 1

    def test_no_match_at_all_yields_none(self) -> None:
        selector = ConfigurationSelector([CapabilityProvider("Other", CONFIG_A)], CapabilityProvider("Never", FALLBACK_CONFIG))
        assert selector.resolve(["RazorExtension"], make_project_instance({})) is None

    def test_empty_provider_list(self) -> None:
        selector = ConfigurationSelector([], CapabilityProvider("RazorExtension", FALLBACK_CONFIG))
        assert selector.resolve(["RazorExtension"], make_project_instance({})) == FALLBACK_CONFIG

    def test_repeated_resolution_is_deterministic(self) -> None:
        selector = ConfigurationSelector(
            [CapabilityProvider("RazorExtension", CONFIG_A), CapabilityProvider("RazorExtension", CONFIG_B)],
            CapabilityProvider("Never", None),
        )
        project_instance = make_project_instance({})
        results = {selector.resolve(["RazorExtension"], project_instance) for _ in range(5)}
        assert results == {CONFIG_A}

    def test_get_razor_configuration_uses_capability_items(self) -> None:
        selector = ConfigurationSelector([CapabilityProvider("RazorExtension", CONFIG_A)], CapabilityProvider("Never", None))

        assert selector.get_razor_configuration(make_project_instance({}, capabilities=["CSharp", "RazorExtension"])) == CONFIG_A
        assert selector.get_razor_configuration(make_project_instance({}, capabilities=["CSharp"])) is None
