from pytest_archon import archrule


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from any other layer of the package.
    """
    (
        archrule("primitives_isolation")
        .match("offer_authorization.primitives*")
        .should_not_import("offer_authorization.domain*")
        .should_not_import("offer_authorization.ports*")
        .should_not_import("offer_authorization.providers*")
        .should_not_import("offer_authorization.adapters*")
        .should_not_import("offer_authorization.authorization*")
        .check("offer_authorization")
    )


def test_domain_isolation() -> None:
    """
    Domain records should be self-contained.
    They must not import from ports, providers, adapters or the saga.
    """
    (
        archrule("domain_isolation")
        .match("offer_authorization.domain*")
        .should_not_import("offer_authorization.ports*")
        .should_not_import("offer_authorization.providers*")
        .should_not_import("offer_authorization.adapters*")
        .should_not_import("offer_authorization.validation*")
        .should_not_import("offer_authorization.authorization*")
        .check("offer_authorization")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations).
    """
    (
        archrule("ports_layering")
        .match("offer_authorization.ports*")
        .should_not_import("offer_authorization.adapters*")
        .should_not_import("offer_authorization.providers*")
        .check("offer_authorization")
    )


def test_pricing_is_pure() -> None:
    """Pricing only reads domain records; it never validates or calls out."""
    (
        archrule("pricing_is_pure")
        .match("offer_authorization.pricing*")
        .should_not_import("offer_authorization.validation*")
        .should_not_import("offer_authorization.providers*")
        .should_not_import("offer_authorization.adapters*")
        .should_not_import("offer_authorization.authorization*")
        .check("offer_authorization")
    )


def test_validation_layering() -> None:
    """Validation talks to verifiers through ports, never to provider variants."""
    (
        archrule("validation_layering")
        .match("offer_authorization.validation*")
        .should_not_import("offer_authorization.providers*")
        .should_not_import("offer_authorization.adapters*")
        .should_not_import("offer_authorization.authorization*")
        .check("offer_authorization")
    )


def test_providers_layering() -> None:
    """
    Provider variants are plugins of the saga.
    They must not import the saga, validation or storage adapters.
    """
    (
        archrule("providers_layering")
        .match("offer_authorization.providers*")
        .should_not_import("offer_authorization.authorization*")
        .should_not_import("offer_authorization.validation*")
        .should_not_import("offer_authorization.adapters*")
        .check("offer_authorization")
    )


def test_adapters_isolation() -> None:
    """
    Adapters implement ports and should be ignored by core logic.
    They must not import the saga or the provider variants.
    """
    (
        archrule("adapters_isolation")
        .match("offer_authorization.adapters*")
        .should_not_import("offer_authorization.authorization*")
        .should_not_import("offer_authorization.providers*")
        .should_not_import("offer_authorization.validation*")
        .check("offer_authorization")
    )


def test_authorization_independent_of_adapters() -> None:
    """The saga depends on ports only; storage is injected."""
    (
        archrule("authorization_independence")
        .match("offer_authorization.authorization*")
        .should_not_import("offer_authorization.adapters*")
        .check("offer_authorization")
    )
