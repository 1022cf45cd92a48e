"""
Unit Tests for PlatformRegistry

Tests the family/platform catalog:
- Idempotent name()/family() factories and condition updates
- Family membership declaration
- Top-level entity lookup and merge precedence
- Capability projection onto a detected platform
"""

import pytest

from ferry.exceptions import PlatformDefinitionError
from ferry.services.platforms import Family, Platform, PlatformCapabilities, PlatformRegistry


@pytest.mark.unit
class TestFactories:
    """Tests for name() and family()."""

    def test_name_returns_same_instance(self, registry: PlatformRegistry) -> None:
        first = registry.name("docker")
        second = registry.name("docker")

        assert first is second
        assert isinstance(first, Platform)

    def test_name_updates_condition_in_place(self, registry: PlatformRegistry) -> None:
        docker = registry.name("docker")

        updated = registry.name("docker", {"backend": "docker"})

        assert updated is docker
        assert docker.condition == {"backend": "docker"}

    def test_empty_condition_still_updates(self, registry: PlatformRegistry) -> None:
        """An empty mapping is a non-None argument and replaces the condition."""
        docker = registry.name("docker", {"backend": "docker"})

        registry.name("docker", {})

        assert docker.condition == {}

    def test_default_condition_resets(self, registry: PlatformRegistry) -> None:
        docker = registry.name("docker", {"backend": "docker"})

        registry.name("docker")

        assert docker.condition == {}

    def test_none_condition_leaves_existing(self, registry: PlatformRegistry) -> None:
        docker = registry.name("docker", {"backend": "docker"})

        registry.name("docker", None)

        assert docker.condition == {"backend": "docker"}

    def test_condition_is_copied(self, registry: PlatformRegistry) -> None:
        condition = {"release": "22.04"}
        ubuntu = registry.name("ubuntu", condition)

        condition["release"] = "24.04"

        assert ubuntu.condition == {"release": "22.04"}

    def test_family_returns_same_instance(self, registry: PlatformRegistry) -> None:
        linux = registry.family("linux")

        assert registry.family("linux", {"os": "linux"}) is linux
        assert isinstance(linux, Family)
        assert linux.condition == {"os": "linux"}

    def test_platform_and_family_catalogs_are_separate(self, registry: PlatformRegistry) -> None:
        platform = registry.name("debian")
        family = registry.family("debian")

        assert platform is not family
        assert registry.get_platform("debian") is platform
        assert registry.get_family("debian") is family
        assert len(registry) == 2

    def test_catalog_views_are_read_only(self, registry: PlatformRegistry) -> None:
        registry.name("ubuntu")

        with pytest.raises(TypeError):
            registry.platforms["other"] = None  # type: ignore[index]

    def test_reset_forgets_everything(self, linux_registry: PlatformRegistry) -> None:
        linux_registry.reset()

        assert len(linux_registry) == 0
        assert linux_registry.top_platforms() == {}


@pytest.mark.unit
class TestMembership:
    """Tests for in_family()."""

    def test_in_family_creates_missing_family(self, registry: PlatformRegistry) -> None:
        ubuntu = registry.name("ubuntu").in_family("debian")

        assert "debian" in registry.families
        assert list(ubuntu.families) == ["debian"]

    def test_condition_becomes_descriptor(self, registry: PlatformRegistry) -> None:
        ubuntu = registry.name("ubuntu", {"release": ">= 14"}).in_family("debian")

        debian = registry.family("debian", None)
        assert ubuntu.families["debian"] == {"release": ">= 14"}
        assert debian.children == [(ubuntu, {"release": ">= 14"})]
        assert ubuntu.condition is None

    def test_in_family_does_not_reset_parent_condition(self, registry: PlatformRegistry) -> None:
        linux = registry.family("linux", {"os": "linux"})

        registry.name("ubuntu").in_family("linux")

        assert linux.condition == {"os": "linux"}

    def test_repeated_membership_replaces_child_entry(self, registry: PlatformRegistry) -> None:
        ubuntu = registry.name("ubuntu").in_family("debian")
        registry.name("ubuntu", {"release": "22.04"}).in_family("debian")

        debian = registry.get_family("debian")
        assert debian.children == [(ubuntu, {"release": "22.04"})]

    def test_family_cannot_join_itself(self, registry: PlatformRegistry) -> None:
        linux = registry.family("linux")

        with pytest.raises(PlatformDefinitionError, match="to itself"):
            linux.in_family("linux")

    def test_platform_may_share_family_name(self, registry: PlatformRegistry) -> None:
        debian = registry.name("debian").in_family("debian")

        assert debian.family_hierarchy == ["debian"]

    def test_titles(self, registry: PlatformRegistry) -> None:
        assert registry.family("linux").title == "Linux Family"
        assert registry.name("ubuntu").title == "Ubuntu"
        assert registry.name("ubuntu").set_title("Ubuntu Linux").title == "Ubuntu Linux"


@pytest.mark.unit
class TestTopPlatforms:
    """Tests for top_platforms()."""

    def test_only_roots_are_returned(self, linux_registry: PlatformRegistry) -> None:
        top = linux_registry.top_platforms()

        assert top == {"unix": linux_registry.get_family("unix")}

    def test_platforms_without_families_are_roots(self, linux_registry: PlatformRegistry) -> None:
        mock = linux_registry.name("mock")

        top = linux_registry.top_platforms()

        assert list(top) == ["mock", "unix"]
        assert top["mock"] is mock

    def test_family_overrides_platform_with_same_name(self, registry: PlatformRegistry) -> None:
        registry.name("windows")
        windows_family = registry.family("windows")

        top = registry.top_platforms()

        assert top == {"windows": windows_family}


@pytest.mark.unit
class TestAddPlatformMethods:
    """Tests for capability projection."""

    def test_projection_is_stored_on_instance(self, linux_registry: PlatformRegistry) -> None:
        ubuntu = linux_registry.get_platform("ubuntu")

        caps = linux_registry.add_platform_methods(ubuntu)

        assert isinstance(caps, PlatformCapabilities)
        assert ubuntu.capabilities is caps
        assert not hasattr(Platform, "linux?")

    def test_other_platforms_are_not_affected(self, linux_registry: PlatformRegistry) -> None:
        ubuntu = linux_registry.get_platform("ubuntu")
        centos = linux_registry.name("centos")

        linux_registry.add_platform_methods(ubuntu)

        assert centos.capabilities is None

    def test_family_flags(self, linux_registry: PlatformRegistry) -> None:
        linux_registry.family("windows")
        ubuntu = linux_registry.get_platform("ubuntu")

        caps = linux_registry.add_platform_methods(ubuntu)

        assert caps.families() == {"unix": True, "linux": True, "windows": False}
        assert caps.has_family("linux")
        assert not caps.has_family("windows")

    def test_has_family_reflects_later_membership(self, linux_registry: PlatformRegistry) -> None:
        ubuntu = linux_registry.get_platform("ubuntu")
        caps = linux_registry.add_platform_methods(ubuntu)

        linux_registry.family("unix").in_family("posix")

        assert caps.has_family("posix")

    def test_attribute_access_is_live(self, linux_registry: PlatformRegistry) -> None:
        ubuntu = linux_registry.get_platform("ubuntu")
        ubuntu.attributes["release"] = "22.04"
        caps = linux_registry.add_platform_methods(ubuntu)

        ubuntu.attributes["release"] = "24.04"

        assert caps.attribute("release") == ("24.04", True)
        assert caps.attribute("arch") == (None, False)
        assert caps.attribute_names() == ["release"]

    def test_reprojection_sees_new_families(self, linux_registry: PlatformRegistry) -> None:
        ubuntu = linux_registry.get_platform("ubuntu")
        linux_registry.add_platform_methods(ubuntu)

        linux_registry.family("bsd")
        caps = linux_registry.add_platform_methods(ubuntu)

        assert "bsd" in caps.families()
        assert ubuntu.capabilities is caps
