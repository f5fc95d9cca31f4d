"""Tests for LayeredMapping."""

from __future__ import annotations

import pytest

from mappingkit import CountingMapping, DefaultMapping, LayeredMapping


@pytest.fixture
def front() -> dict[str, int]:
    return {'a': 1, 'b': 2}


@pytest.fixture
def middle() -> dict[str, int]:
    return {'b': 3, 'c': 4}


@pytest.fixture
def back() -> dict[str, int]:
    return {'c': 5, 'd': 6}


@pytest.fixture
def view(
    front: dict[str, int], middle: dict[str, int], back: dict[str, int]
) -> LayeredMapping[str, int]:
    return LayeredMapping(front, middle, back)


class TestRead:
    def test_first_match_wins(self, view: LayeredMapping[str, int]) -> None:
        assert view.read('a') == 1
        assert view.read('b') == 2
        assert view.read('c') == 4
        assert view.read('d') == 6
        assert view['c'] == 4

    def test_missing_key_raises(self, view: LayeredMapping[str, int]) -> None:
        with pytest.raises(KeyError):
            view.read('z')
        with pytest.raises(KeyError):
            view['z']

    def test_does_not_materialize_defaults(self) -> None:
        back: DefaultMapping[str, int] = DefaultMapping(int, {'a': 1})
        view: LayeredMapping[str, int] = LayeredMapping({}, back)
        with pytest.raises(KeyError):
            view.read('z')
        assert dict(back) == {'a': 1}

    def test_get_falls_back_to_default(
        self, view: LayeredMapping[str, int]
    ) -> None:
        assert view.get('z') is None
        assert view.get('d') == 6


class TestReadWrite:
    def test_present_in_front(
        self,
        view: LayeredMapping[str, int],
        front: dict[str, int],
        middle: dict[str, int],
    ) -> None:
        assert view.read_write('b') == 2
        assert front == {'a': 1, 'b': 2}
        assert middle == {'b': 3, 'c': 4}

    def test_promotes_value_from_deeper_layer(
        self,
        view: LayeredMapping[str, int],
        front: dict[str, int],
        back: dict[str, int],
    ) -> None:
        assert view.read_write('d') == 6
        assert front == {'a': 1, 'b': 2, 'd': 6}
        assert back == {'c': 5, 'd': 6}

    def test_mutation_affects_front_only(self) -> None:
        front: dict[str, list[int]] = {}
        back = {'a': [1]}
        view = LayeredMapping(front, back)
        view.read_write('a').append(2)
        assert front == {'a': [1, 2]}
        assert back == {'a': [1]}

    def test_missing_key_uses_front_default(self) -> None:
        front: DefaultMapping[str, int] = DefaultMapping(lambda: -1)
        view = LayeredMapping(front, {'a': 1})
        assert view.read_write('z') == -1
        assert dict(front) == {'z': -1}

    def test_missing_key_in_counting_front_stores_zero(self) -> None:
        front: CountingMapping[str] = CountingMapping()
        view = LayeredMapping(front, {'a': 1})
        assert view.read_write('z') == 0
        assert dict(front) == {'z': 0}

    def test_missing_key_without_front_default_raises(
        self, view: LayeredMapping[str, int], front: dict[str, int]
    ) -> None:
        with pytest.raises(KeyError):
            view.read_write('z')
        assert front == {'a': 1, 'b': 2}

    def test_augmented_assignment_writes_front(self) -> None:
        middle, back = {'b': 3, 'c': 4}, {'c': 5, 'd': 6}
        view = LayeredMapping(middle, back)
        view['d'] += 1
        assert middle == {'b': 3, 'c': 4, 'd': 7}
        assert back == {'c': 5, 'd': 6}


class TestWrite:
    def test_set_item_writes_front(
        self,
        view: LayeredMapping[str, int],
        front: dict[str, int],
        back: dict[str, int],
    ) -> None:
        view['d'] = 10
        assert front['d'] == 10
        assert back['d'] == 6
        assert view['d'] == 10

    def test_erase_front_only(
        self,
        view: LayeredMapping[str, int],
        front: dict[str, int],
        middle: dict[str, int],
    ) -> None:
        assert view.erase('b') == 1
        assert front == {'a': 1}
        assert middle == {'b': 3, 'c': 4}
        assert view['b'] == 3

    def test_erase_missing_in_front(
        self, view: LayeredMapping[str, int], back: dict[str, int]
    ) -> None:
        assert view.erase('d') == 0
        assert back == {'c': 5, 'd': 6}

    def test_pop_acts_on_front_only(
        self,
        view: LayeredMapping[str, int],
        front: dict[str, int],
        back: dict[str, int],
    ) -> None:
        assert view.pop('d', None) is None
        assert back == {'c': 5, 'd': 6}
        with pytest.raises(KeyError):
            view.pop('d')
        assert view.pop('a') == 1
        assert front == {'b': 2}

    def test_popitem_and_clear_act_on_front_only(
        self,
        view: LayeredMapping[str, int],
        front: dict[str, int],
        middle: dict[str, int],
        back: dict[str, int],
    ) -> None:
        assert view.popitem() == ('b', 2)
        view.clear()
        assert front == {}
        with pytest.raises(KeyError):
            view.popitem()
        assert middle == {'b': 3, 'c': 4}
        assert back == {'c': 5, 'd': 6}
        assert view.flatten() == {'b': 3, 'c': 4, 'd': 6}

    def test_delete_missing_in_front_raises(
        self, view: LayeredMapping[str, int]
    ) -> None:
        with pytest.raises(KeyError):
            del view['c']
        del view['a']
        assert 'a' not in view


class TestLayers:
    def test_layer_at_returns_reference(
        self, view: LayeredMapping[str, int], back: dict[str, int]
    ) -> None:
        assert view.layer_at(2) is back
        view.layer_at(2)['c'] += 1
        assert back == {'c': 6, 'd': 6}

    @pytest.mark.parametrize('index', [3, 10, -1])
    def test_layer_at_out_of_range(
        self, view: LayeredMapping[str, int], index: int
    ) -> None:
        with pytest.raises(IndexError):
            view.layer_at(index)

    def test_prepend(
        self, middle: dict[str, int], back: dict[str, int]
    ) -> None:
        view = LayeredMapping(middle, back)
        front = {'a': 1, 'b': 2}
        extended = view.prepend(front)
        assert extended.layers == (front, middle, back)
        assert all(
            layer is expected
            for layer, expected in zip(extended.layers, (front, middle, back))
        )
        assert view.layers == (middle, back)
        assert extended.flatten() == {'a': 1, 'b': 2, 'c': 4, 'd': 6}
        assert extended.layer_at(2) is back
        with pytest.raises(IndexError):
            extended.layer_at(3)


class TestFlatten:
    def test_front_wins(self, view: LayeredMapping[str, int]) -> None:
        assert view.flatten() == {'a': 1, 'b': 2, 'c': 4, 'd': 6}

    def test_result_is_independent(
        self, view: LayeredMapping[str, int], front: dict[str, int]
    ) -> None:
        result = view.flatten()
        result['a'] = 100
        assert front['a'] == 1


class TestMappingProtocol:
    def test_keys_union(self, view: LayeredMapping[str, int]) -> None:
        assert list(view) == ['a', 'b', 'c', 'd']
        assert len(view) == 4
        assert 'd' in view
        assert 'z' not in view

    def test_equality_with_flattened(
        self, view: LayeredMapping[str, int]
    ) -> None:
        assert view == view.flatten()

    def test_repr(self) -> None:
        assert repr(LayeredMapping({'a': 1}, {})) == (
            "LayeredMapping({'a': 1}, {})"
        )


class TestSingleLayer:
    def test_passes_through(self) -> None:
        layer = {'a': 1}
        view = LayeredMapping(layer)
        assert view.read('a') == 1
        view['b'] = 2
        assert view.erase('a') == 1
        assert layer == {'b': 2}
        assert view.layer_at(0) is layer
        with pytest.raises(IndexError):
            view.layer_at(1)

    def test_prepend_adds_front(self) -> None:
        layer = {'a': 1}
        front = {'a': 0}
        view = LayeredMapping(layer).prepend(front)
        assert view['a'] == 0
        assert view.layer_at(1) is layer
