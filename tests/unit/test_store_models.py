"""Tests for store models."""
import json

import pytest

from nodestore.core.store.models import ACTIONS, Action, Node, Result


class TestNode:
    """Test suite for Node."""

    @pytest.fixture
    def tree(self):
        """Create /a with children b (leaf) and c (dir holding d)."""
        root = Node('/', is_dir=True)
        a = Node('/a', is_dir=True)
        root.add_child(a)
        a.add_child(Node('/a/b', value='1'))
        c = Node('/a/c', is_dir=True)
        a.add_child(c)
        c.add_child(Node('/a/c/d', value='2'))
        return root

    def test_init_leaf(self):
        """Test leaf defaults."""
        node = Node('/x', value='v')

        assert node.is_dir is False
        assert node.value == 'v'
        assert node.children is None
        assert node.name == 'x'

    def test_init_directory_drops_value(self):
        """Test directories never carry a value."""
        node = Node('/d', is_dir=True, value='v')

        assert node.value is None
        assert node.children == {}

    def test_root_name(self):
        """Test root has an empty name."""
        root = Node('/', is_dir=True)

        assert root.name == ''
        assert root.is_root is True

    def test_add_child_sets_parent(self, tree):
        """Test parent links."""
        a = tree.get_child('a')

        assert a.get_parent() is tree
        assert a.get_child('b').get_parent() is a

    def test_add_child_to_leaf_fails(self):
        """Test leaves cannot hold children."""
        leaf = Node('/x', value='v')

        with pytest.raises(ValueError):
            leaf.add_child(Node('/x/y'))

    def test_add_child_replaces_in_place(self, tree):
        """Test same-name child replacement keeps order and detaches old."""
        a = tree.get_child('a')
        old = a.get_child('b')
        new = Node('/a/b', value='new')

        a.add_child(new)

        assert [c.name for c in a.get_children()] == ['b', 'c']
        assert a.get_child('b') is new
        assert old.get_parent() is None

    def test_remove_child(self, tree):
        """Test removing a child."""
        a = tree.get_child('a')

        removed = a.remove_child('b')

        assert removed.key == '/a/b'
        assert removed.get_parent() is None
        assert a.get_child('b') is None
        assert a.remove_child('missing') is None

    def test_get_children_sorted(self):
        """Test name ordering."""
        d = Node('/d', is_dir=True)
        for name in ('z', 'a', 'm'):
            d.add_child(Node(f'/d/{name}'))

        assert [c.name for c in d.get_children()] == ['z', 'a', 'm']
        assert [c.name for c in d.get_children(sorted_children=True)] == ['a', 'm', 'z']

    def test_get_children_of_leaf(self):
        """Test leaves list nothing."""
        assert Node('/x').get_children() == []

    def test_clone_is_deep(self, tree):
        """Test clone shares nothing with the source."""
        copy = tree.clone()
        copy.get_child('a').get_child('b').value = 'changed'

        assert tree.get_child('a').get_child('b').value == '1'
        assert copy.get_parent() is None

    def test_clone_depth(self, tree):
        """Test depth limits copied levels."""
        a = tree.get_child('a')

        shallow = a.clone(depth=0)
        one_level = a.clone(depth=1)

        assert shallow.get_children() == []
        assert one_level.get_child('c').get_children() == []
        assert a.clone().get_child('c').get_child('d').value == '2'

    def test_iter_subtree(self, tree):
        """Test depth-first walk."""
        keys = [n.key for n in tree.iter_subtree()]

        assert keys == ['/', '/a', '/a/b', '/a/c', '/a/c/d']

    def test_to_dict(self, tree):
        """Test dictionary form."""
        data = tree.get_child('a').to_dict()

        assert data['key'] == '/a'
        assert data['dir'] is True
        assert data['nodes'][0] == {'key': '/a/b', 'dir': False, 'value': '1'}
        assert 'value' not in data


class TestResult:
    """Test suite for Result."""

    def test_actions(self):
        """Test action verbs."""
        assert ACTIONS == ('get', 'set', 'update', 'create', 'delete')

    def test_unknown_action_rejected(self):
        """Test action validation."""
        with pytest.raises(ValueError):
            Result('rename', Node('/x'))

    def test_key_mismatch_rejected(self):
        """Test snapshots must describe the same key."""
        with pytest.raises(ValueError):
            Result(Action.UPDATE, Node('/x'), Node('/y'))

    def test_clone(self):
        """Test clone is independent."""
        result = Result(Action.UPDATE, Node('/x', value='new'), Node('/x', value='old'))

        copy = result.clone()
        copy.curr_node.value = 'other'
        copy.prev_node.value = 'other'

        assert result.curr_node.value == 'new'
        assert result.prev_node.value == 'old'
        assert copy.action == Action.UPDATE

    def test_clone_without_prev(self):
        """Test clone keeps a missing prev_node missing."""
        copy = Result(Action.CREATE, Node('/x')).clone()

        assert copy.prev_node is None

    def test_to_json(self):
        """Test JSON form."""
        result = Result(Action.UPDATE, Node('/x', value='new'), Node('/x', value='old'))

        data = json.loads(result.to_json())

        assert data['action'] == 'update'
        assert data['node']['value'] == 'new'
        assert data['prevNode']['value'] == 'old'
