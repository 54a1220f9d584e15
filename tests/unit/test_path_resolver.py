"""Tests for path normalization and resolution."""
import pytest

from nodestore.core.store.hierarchy import PathResolver
from nodestore.core.store.models import Node


@pytest.fixture
def root():
    """Tree with /a (dir), /a/b (dir), /a/leaf (leaf)."""
    root = Node('/', is_dir=True)
    a = Node('/a', is_dir=True)
    root.add_child(a)
    a.add_child(Node('/a/b', is_dir=True))
    a.add_child(Node('/a/leaf', value='v'))
    return root


class TestNormalize:
    """Test suite for PathResolver.normalize."""

    @pytest.mark.parametrize('key, expected', [
        ('', '/'),
        ('/', '/'),
        ('xxx', '/xxx'),
        ('/xxx', '/xxx'),
        ('a//b', '/a/b'),
        ('//a///b//', '/a/b'),
        ('/a/./b', '/a/b'),
        ('a/c/../b', '/a/b'),
        ('/../../a', '/a'),
    ])
    def test_normalize(self, key, expected):
        """Test canonical forms."""
        assert PathResolver.normalize(key) == expected

    def test_split(self):
        """Test segments of a canonical path."""
        assert PathResolver.split('/a/b') == ['a', 'b']
        assert PathResolver.split('/') == []

    def test_join(self):
        """Test joining a parent path and a name."""
        assert PathResolver.join('/', 'a') == '/a'
        assert PathResolver.join('/a', 'b') == '/a/b'


class TestResolve:
    """Test suite for PathResolver.resolve."""

    def test_resolve_root(self, root):
        """Test empty path resolves to root."""
        res = PathResolver.resolve(root, '/')

        assert res.found
        assert res.node is root
        assert res.parent is None

    def test_resolve_existing(self, root):
        """Test full resolution."""
        res = PathResolver.resolve(root, 'a/b')

        assert res.path == '/a/b'
        assert res.node.key == '/a/b'
        assert res.parent.key == '/a'
        assert res.missing == []
        assert not res.is_blocked

    def test_resolve_missing(self, root):
        """Test partial resolution reports the deepest directory."""
        res = PathResolver.resolve(root, '/a/b/x/y')

        assert not res.found
        assert res.parent.key == '/a/b'
        assert res.missing == ['x', 'y']
        assert not res.is_blocked

    def test_resolve_blocked_by_leaf(self, root):
        """Test a leaf in the middle is reported as blocking."""
        res = PathResolver.resolve(root, '/a/leaf/x')

        assert not res.found
        assert res.is_blocked
        assert res.blocked_by.key == '/a/leaf'
        assert res.parent.key == '/a'
        assert res.missing == ['leaf', 'x']

    def test_resolve_path(self, root):
        """Test the node-only shortcut."""
        assert PathResolver.resolve_path(root, '/a/leaf').value == 'v'
        assert PathResolver.resolve_path(root, '/nope') is None

    def test_resolve_is_read_only(self, root):
        """Test resolution never creates nodes."""
        PathResolver.resolve(root, '/new/deep/path')

        assert root.get_child('new') is None
