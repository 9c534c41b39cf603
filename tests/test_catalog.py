import pytest
from pydantic import ValidationError

from chronosnap.catalog.eras import ERAS, all_scenes, find_scene
from chronosnap.catalog.schema import CUSTOM_SCENE_ID, Icon, Scene


def test_scene_ids_unique_across_catalog():
    ids = [s.id for s in all_scenes()]
    assert len(ids) == len(set(ids))


def test_every_scene_has_prompt_and_known_icon():
    for scene in all_scenes():
        assert scene.generation_prompt.strip()
        assert isinstance(scene.icon, Icon)


def test_catalog_shape():
    assert [e.id for e in ERAS] == ["ancient-egypt", "renaissance", "victorian", "roaring-20s", "environments"]
    assert len(all_scenes()) == 17
    assert [s.id for s in ERAS[0].scenes] == ["pyramids", "pharaoh", "nile"]


def test_find_scene():
    assert find_scene("jazz").icon is Icon.MUSIC
    assert find_scene("nope") is None


def test_icon_lookup_is_total():
    assert Icon.from_key("Crown") is Icon.CROWN
    assert Icon.from_key("Unicorn") is Icon.MAP_PIN
    assert Icon.from_key("") is Icon.MAP_PIN
    assert Icon.from_key(None) is Icon.MAP_PIN
    assert Icon.from_key(Icon.SUN) is Icon.SUN


def test_unknown_icon_key_falls_back_on_scene():
    s = Scene.cataloged("x", "X", "somewhere", "NotAnIcon")
    assert s.icon is Icon.MAP_PIN


def test_custom_scene_has_same_shape():
    s = Scene.custom("walking on Mars in a spacesuit")
    assert s.id == CUSTOM_SCENE_ID
    assert s.display_name == "Otro Lugar"
    assert s.generation_prompt == "walking on Mars in a spacesuit"
    assert s.icon is Icon.MAP_PIN


def test_scenes_are_immutable():
    s = find_scene("gym")
    with pytest.raises(ValidationError):
        s.generation_prompt = "changed"
