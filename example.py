#!/usr/bin/env python3
"""
Example of a package declaring a configured, tagged service.
"""

from config_factory import load_config
from container import configure_container, configure_logging
from service_packages import Container, Package

TAG_SOME_SERVICE = 'tag.some_service'


class SomeService:
    """Service built from configuration."""

    def __init__(self, some_value: int):
        self.some_value = some_value

    def do_something(self) -> None:
        print(f"SomeService(some_value={self.some_value})")


class MyPackage(Package):
    """Declares SomeService with a default configuration."""

    auto_tag_support = True

    def register(self, container: Container) -> None:
        super().register(container)

        self._register_some_library(container)

    def _register_some_library(self, container: Container) -> None:
        # Defaults only fill gaps left by the custom configuration.
        self.declare_configuration('SomeService', {
            'some_value': 0,
        })

        # Read the configuration after declaring the defaults.
        configuration = container[self.SERVICE_NAME_CONFIGURATION]

        def build_some_service(container: Container) -> SomeService:
            settings = configuration['SomeService']
            return SomeService(settings['some_value'])

        # Either declare the service and tag it separately...
        self.declare_service('SomeService', build_some_service)
        self.declare_tag(TAG_SOME_SERVICE, 'SomeService')

        # ...or do both at the same time.
        self.declare_tag_and_service(TAG_SOME_SERVICE, 'SomeService', build_some_service)


def main():
    """Register the package twice and resolve the tagged services."""
    config = load_config()
    configure_logging(config.log_level)

    container = configure_container(config=config, configuration={
        'SomeService': {
            'some_value': 10,
        },
    })

    # Without a container the package binds the one passed to register()...
    container.register(MyPackage())
    # ...or it is given one up front.
    package = MyPackage(container)
    container.register(package)

    for service in package.resolve_tag(TAG_SOME_SERVICE):
        service.do_something()


if __name__ == '__main__':
    main()
