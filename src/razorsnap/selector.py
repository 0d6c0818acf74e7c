from collections.abc import Sequence

from sensai.util import logging

from razorsnap.constants import PROJECT_CAPABILITY_ITEM_TYPE
from razorsnap.model import RazorConfiguration
from razorsnap.project import ProjectPropertyView
from razorsnap.providers import RazorConfigurationProvider, RazorConfigurationProviderContext

log = logging.getLogger(__name__)


class ConfigurationSelector:
    """
    Selects the Razor configuration of a project by consulting a chain of providers.
    The first provider (in the given order) which applies determines the result; if none applies, the fallback
    provider is consulted as the last resort.
    """

    def __init__(self, providers: Sequence[RazorConfigurationProvider], fallback_provider: RazorConfigurationProvider) -> None:
        """
        :param providers: the providers to consult, in order of precedence
        :param fallback_provider: the provider to consult if none of the providers applies
        """
        self._providers = tuple(providers)
        self._fallback_provider = fallback_provider

    def resolve(self, project_capabilities: Sequence[str], project_instance: ProjectPropertyView) -> RazorConfiguration | None:
        """
        :param project_capabilities: the capabilities declared by the project
        :param project_instance: the evaluated project
        :return: the configuration, or None if no provider (not even the fallback) applies
        """
        context = RazorConfigurationProviderContext(tuple(project_capabilities), project_instance)
        for provider in self._providers:
            configuration = provider.try_resolve_configuration(context)
            if configuration is not None:
                log.debug("Razor configuration %s resolved by %s", configuration, provider.__class__.__name__)
                return configuration

        configuration = self._fallback_provider.try_resolve_configuration(context)
        if configuration is not None:
            log.debug("Razor configuration %s resolved by fallback provider", configuration)
        else:
            log.debug("No Razor configuration applies to project with capabilities %s", list(project_capabilities))
        return configuration

    def get_razor_configuration(self, project_instance: ProjectPropertyView) -> RazorConfiguration | None:
        """
        Resolves the configuration of the given project, taking its capabilities from its `ProjectCapability` items.
        """
        project_capabilities = [item.evaluated_include for item in project_instance.get_items(PROJECT_CAPABILITY_ITEM_TYPE)]
        return self.resolve(project_capabilities, project_instance)
