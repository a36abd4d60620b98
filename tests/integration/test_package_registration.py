"""
Integration tests for registering packages on a bootstrapped container.

Tests the full flow: custom configuration seeded first, packages declaring
defaults, services and tags, then resolution.
"""

import pytest

from config_factory import ConfigError, load_config
from container import configure_container
from service_packages.container import Container
from service_packages.core.errors import PackageError, PackageErrorKind
from service_packages.packages import Package

TAG_SOME_SERVICE = 'tag.some_service'


class SomeService:
    def __init__(self, some_value):
        self.some_value = some_value


class SomePackage(Package):
    """Declares SomeService reading its configuration snapshot."""

    auto_tag_support = True

    def register(self, container):
        super().register(container)

        self.declare_configuration('SomeService', {'some_value': 0})
        configuration = container[self.SERVICE_NAME_CONFIGURATION]

        self.declare_tag_and_service(
            TAG_SOME_SERVICE,
            'SomeService',
            lambda c: SomeService(configuration['SomeService']['some_value'])
        )


class AliasPackage(Package):
    """Exposes SomeService under a second name."""

    def register(self, container):
        super().register(container)
        self.declare_service_alias('some_service', 'SomeService')


class StrictTagPackage(Package):
    """Tags a service without enabling tag support."""

    def register(self, container):
        super().register(container)
        self.declare_service('Before', lambda c: 'before')
        self.declare_tag_and_service('tag.strict', 'Strict', lambda c: 'strict')


class TestCustomConfigurationWins:
    """Custom configuration present before registration shadows package defaults"""

    def test_custom_value_wins_over_default(self):
        container = configure_container(
            configuration={'SomeService': {'some_value': 10}},
            packages=[SomePackage()]
        )

        assert container['SomeService'].some_value == 10

    def test_default_used_without_custom_value(self):
        container = configure_container(packages=[SomePackage()])

        assert container['SomeService'].some_value == 0
        assert container['configuration'] == {'SomeService': {'some_value': 0}}

    def test_package_bound_at_construction(self):
        container = Container({'configuration': {'SomeService': {'some_value': 10}}})
        package = SomePackage(container)

        container.register(package)

        assert package.container is container
        assert container['SomeService'].some_value == 10

    def test_configuration_file_then_explicit_values(self, tmp_path):
        path = tmp_path / 'services.yaml'
        path.write_text(
            "SomeService:\n"
            "  some_value: 5\n"
            "  nested:\n"
            "    a: 1\n",
            encoding='utf-8'
        )

        container = configure_container(
            configuration={'SomeService': {'some_value': 10}},
            configuration_file=str(path),
            packages=[SomePackage()]
        )

        assert container['configuration']['SomeService'] == {'some_value': 10, 'nested': {'a': 1}}
        assert container['SomeService'].some_value == 10

    def test_late_custom_configuration_does_not_reach_built_snapshot(self):
        container = configure_container(packages=[SomePackage()])

        container['configuration'] = {'SomeService': {'some_value': 99}}

        assert container['SomeService'].some_value == 0


class TestTagsAcrossPackages:
    """Tags and aliases shared by packages on one container"""

    def test_registering_twice_duplicates_tag_entries(self):
        container = configure_container()
        package = SomePackage()

        container.register(package)
        container.register(package)

        assert container['tag'][TAG_SOME_SERVICE] == ['SomeService', 'SomeService']
        services = package.resolve_tag(TAG_SOME_SERVICE)
        assert services[0] is services[1]

    def test_alias_from_other_package(self):
        container = configure_container(packages=[SomePackage(), AliasPackage()])

        assert container['some_service'] is container['SomeService']

    def test_missing_tag_support_aborts_without_rollback(self):
        container = configure_container()

        with pytest.raises(PackageError) as exc_info:
            container.register(StrictTagPackage())

        assert exc_info.value.kind == PackageErrorKind.MISSING_TAG_SUPPORT
        assert container['Before'] == 'before'
        assert 'Strict' not in container


class TestExample:
    """The example script runs end to end"""

    def test_example_main(self, capsys, monkeypatch):
        monkeypatch.delenv('SERVICE_PACKAGES_LOG_LEVEL', raising=False)
        monkeypatch.delenv('SERVICE_PACKAGES_CONFIGURATION_FILE', raising=False)
        monkeypatch.delenv('SERVICE_PACKAGES_ENV', raising=False)
        import example

        example.main()

        output = capsys.readouterr().out
        assert "SomeService(some_value=10)" in output

    def test_example_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv('SERVICE_PACKAGES_LOG_LEVEL', 'verbose')
        import example

        with pytest.raises(ConfigError, match="Invalid log_level"):
            example.main()


class TestRuntimeConfiguration:
    """Runtime configuration loaded from the environment drives the bootstrap"""

    def test_configuration_file_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / 'services.yaml'
        path.write_text("SomeService:\n  some_value: 42\n", encoding='utf-8')
        monkeypatch.setenv('SERVICE_PACKAGES_CONFIGURATION_FILE', str(path))

        container = configure_container(config=load_config(), packages=[SomePackage()])

        assert container['SomeService'].some_value == 42

    def test_explicit_file_wins_over_environment(self, tmp_path, monkeypatch):
        env_path = tmp_path / 'env.yaml'
        env_path.write_text("SomeService:\n  some_value: 42\n", encoding='utf-8')
        explicit_path = tmp_path / 'explicit.yaml'
        explicit_path.write_text("SomeService:\n  some_value: 7\n", encoding='utf-8')
        monkeypatch.setenv('SERVICE_PACKAGES_CONFIGURATION_FILE', str(env_path))

        container = configure_container(
            configuration_file=str(explicit_path),
            config=load_config(),
            packages=[SomePackage()]
        )

        assert container['SomeService'].some_value == 7

    def test_example_reads_configuration_file_from_environment(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / 'services.yaml'
        path.write_text("SomeService:\n  some_value: 3\n  extra: true\n", encoding='utf-8')
        monkeypatch.setenv('SERVICE_PACKAGES_CONFIGURATION_FILE', str(path))
        monkeypatch.delenv('SERVICE_PACKAGES_LOG_LEVEL', raising=False)
        monkeypatch.delenv('SERVICE_PACKAGES_ENV', raising=False)
        import example

        example.main()

        # The explicit value in the example still wins over the file.
        assert "SomeService(some_value=10)" in capsys.readouterr().out
