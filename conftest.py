"""
Global pytest configuration and fixtures.
Provides containers and packages for tests.
"""

import pytest

from config_factory import reset_config
from service_packages.container import Container
from service_packages.packages import Package


class EmptyPackage(Package):
    """Package that declares nothing beyond binding."""
    pass


@pytest.fixture(scope="function", autouse=True)
def reset_global_config():
    """Reset the global configuration factory before each test."""
    reset_config()
    yield


@pytest.fixture(scope="function")
def container():
    """Provide an empty container."""
    return Container()


@pytest.fixture(scope="function")
def package(container):
    """Provide a package bound to the container."""
    package = EmptyPackage()
    package.register(container)
    return package


@pytest.fixture(scope="function")
def tagged_package(package):
    """Provide a bound package with tag support enabled."""
    package.enable_tag_support()
    return package


@pytest.fixture(scope="function")
def configured_package(package):
    """Provide a bound package with configuration support enabled."""
    package.enable_configuration_support()
    return package
