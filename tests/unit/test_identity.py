from tests.unit.sample_assets import Gadget, Widget


def test_same_path_means_same_resource():
    assert Widget(Name="acme", Colour="red") == Widget(Name="acme", Colour="blue")
    assert Widget(Name="acme") != Widget(Name="other")


def test_paths_compare_segment_wise():
    assert Widget({"__REPRESENTATION__": "/widget/acme"}) == Widget(Name="acme")
    assert Widget({"__REPRESENTATION__": "/widget/acme/x"}) != Widget(Name="acme")


def test_concrete_type_must_match():
    assert Widget(Name="acme") != Gadget(Name="acme")
    assert Gadget(Name="acme") != Widget(Name="acme")
    assert Widget(Name="acme") != ("widget", "acme")


def test_undeterminable_paths_are_only_equal_by_identity():
    first, second = Widget(), Widget()
    assert first != second
    assert first == first


def test_hash_follows_path():
    a, b = Widget(Name="acme"), Widget(Name="acme", Colour="red")
    assert hash(a) == hash(b)
    assert len({a, b, Widget(Name="other")}) == 2
