from trailhop.config import AppConfig
from trailhop.container import Container
from trailhop.ports.transit import TransitProviderPort


class FakeTransit:
    pass


def test_register_and_resolve_fake():
    container = Container(config=AppConfig())
    assert not container.is_registered(TransitProviderPort)

    container.register(TransitProviderPort, FakeTransit)

    assert container.is_registered(TransitProviderPort)
    assert isinstance(container.resolve(TransitProviderPort), FakeTransit)


def test_clear_singletons_rebuilds_on_next_resolve():
    container = Container(config=AppConfig())
    container.register(TransitProviderPort, FakeTransit)
    first = container.resolve(TransitProviderPort)

    container.clear_singletons()

    assert container.resolve(TransitProviderPort) is not first


def test_transient_registration_builds_each_time():
    container = Container(config=AppConfig())
    container.register(TransitProviderPort, FakeTransit, singleton=False)
    assert container.resolve(TransitProviderPort) is not container.resolve(
        TransitProviderPort
    )
