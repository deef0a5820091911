"""
Component registry for dashboard
This module manages all dashboard components and the providers they expose.
"""


class ComponentRegistry:
    """Registry for dashboard components"""

    def __init__(self):
        self.components = {}
        self.providers = {}

    def register_component(self, name, component_class):
        """Register a dashboard component"""
        self.components[name] = component_class

    def get_component(self, name):
        """Get a registered component"""
        return self.components.get(name)

    def register_provider(self, provider):
        """Register a stateful provider so the app can observe and reset it"""
        self.providers[provider.name] = provider
        return provider

    def reset_providers(self):
        """Drop all session state, e.g. after logout"""
        for provider in self.providers.values():
            provider.reset()

    def describe(self):
        return [
            {
                'name': name,
                'service': component_class.__name__,
                'stateful': name in self.providers
            }
            for name, component_class in sorted(self.components.items())
        ]


# Global registry instance
registry = ComponentRegistry()


def register_component(name):
    """Decorator for registering components"""
    def decorator(component_class):
        registry.register_component(name, component_class)
        return component_class
    return decorator


__all__ = ['ComponentRegistry', 'registry', 'register_component']
