"""Unit tests for Post domain model — creation, validation, patching, sort parsing."""

import unittest
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from bson import ObjectId

from domain.model.errors import ValidationError
from domain.model.post import Post, PostSort, SortField, SortOrder, normalize_tags, validate_post
from domain.model.timestamps import as_utc, next_timestamp, utc_now
from domain.model.user import User


class TestPostCreate(unittest.TestCase):

    def test_create_sets_id_and_equal_timestamps(self):
        post = Post.create(author='user-1', title='Hello', contents='Body', tags=['a'])

        self.assertTrue(ObjectId.is_valid(post.id))
        self.assertEqual(post.created_at, post.updated_at)
        self.assertEqual(post.created_at.tzinfo, timezone.utc)
        self.assertEqual(post.created_at.microsecond % 1000, 0)
        self.assertEqual(post.tags, ['a'])

    def test_create_generates_fresh_ids(self):
        first = Post.create(author='user-1', title='One')
        second = Post.create(author='user-1', title='Two')
        self.assertNotEqual(first.id, second.id)

    def test_create_without_title_fails(self):
        with self.assertRaises(ValidationError) as ctx:
            Post.create(author='user-1', title=None)
        self.assertIn('`title` is required', str(ctx.exception))

    def test_create_with_blank_title_fails(self):
        with self.assertRaises(ValidationError):
            Post.create(author='user-1', title='   ')

    def test_create_without_author_fails(self):
        with self.assertRaises(ValidationError) as ctx:
            Post.create(author=None, title='Anonymous Post')
        self.assertIn('`author` is required', str(ctx.exception))

    def test_minimal_post_has_empty_tags_and_no_contents(self):
        post = Post.create(author='user-1', title='Only a title')
        self.assertEqual(post.tags, [])
        self.assertIsNone(post.contents)


class TestNormalizeTags(unittest.TestCase):

    def test_single_string_becomes_list(self):
        self.assertEqual(normalize_tags('react'), ['react'])

    def test_tuple_becomes_list(self):
        self.assertEqual(normalize_tags(('a', 'b')), ['a', 'b'])

    def test_non_string_items_rejected(self):
        with self.assertRaises(ValidationError):
            normalize_tags(['ok', 3])


class TestPostPatched(unittest.TestCase):

    def setUp(self):
        self.post = Post.create(author='user-1', title='Title', contents='Old', tags=['x'])

    def test_patch_changes_only_given_fields(self):
        patched = self.post.patched({'contents': 'New'})

        self.assertEqual(patched.contents, 'New')
        self.assertEqual(patched.title, 'Title')
        self.assertEqual(patched.tags, ['x'])
        self.assertGreater(patched.updated_at, self.post.updated_at)
        self.assertEqual(patched.created_at, self.post.created_at)

    def test_patch_ignores_author_and_unknown_keys(self):
        patched = self.post.patched({'author': 'someone-else', 'id': 'other', 'likes': 3})
        self.assertEqual(patched.author, 'user-1')
        self.assertEqual(patched.id, self.post.id)

    def test_patch_leaves_original_untouched(self):
        self.post.patched({'title': 'Changed'})
        self.assertEqual(self.post.title, 'Title')

    def test_patch_to_empty_title_fails(self):
        with self.assertRaises(ValidationError):
            self.post.patched({'title': ''})

    def test_is_owned_by(self):
        self.assertTrue(self.post.is_owned_by('user-1'))
        self.assertFalse(self.post.is_owned_by('user-2'))
        self.assertFalse(self.post.is_owned_by(None))


class TestPostSort(unittest.TestCase):

    def test_defaults(self):
        sort = PostSort.parse()
        self.assertEqual(sort.sort_by, SortField.CREATED_AT)
        self.assertEqual(sort.sort_order, SortOrder.DESCENDING)
        self.assertTrue(sort.descending)

    def test_parse_strings(self):
        sort = PostSort.parse('updatedAt', 'ascending')
        self.assertEqual(sort.sort_by.attribute, 'updated_at')
        self.assertFalse(sort.descending)

    def test_invalid_sort_by(self):
        with self.assertRaises(ValidationError) as ctx:
            PostSort.parse('author')
        self.assertIn('sortBy', str(ctx.exception))

    def test_invalid_sort_order(self):
        with self.assertRaises(ValidationError):
            PostSort.parse('title', 'sideways')


class TestTimestamps(unittest.TestCase):

    def test_next_timestamp_is_strictly_later_than_future_value(self):
        future = utc_now() + timedelta(seconds=5)
        self.assertEqual(next_timestamp(future), future + timedelta(milliseconds=1))

    def test_next_timestamp_uses_clock_when_ahead(self):
        past = utc_now() - timedelta(days=1)
        self.assertGreater(next_timestamp(past), past + timedelta(milliseconds=1))

    def test_as_utc_attaches_timezone_to_naive(self):
        naive = datetime(2026, 1, 1, 12, 0)
        self.assertEqual(as_utc(naive).tzinfo, timezone.utc)


class TestUserCreate(unittest.TestCase):

    def test_create_requires_username(self):
        with self.assertRaises(ValidationError) as ctx:
            User.create(username='', password_hash='hash')
        self.assertIn('`username` is required', str(ctx.exception))

    def test_to_info_drops_password_hash(self):
        user = User.create(username='hello', password_hash='hash')
        info = user.to_info()
        self.assertEqual(info.username, 'hello')
        self.assertEqual(info.id, user.id)
        self.assertFalse(hasattr(info, 'password_hash'))


class TestStringCasting(unittest.TestCase):
    """Non-string field values are cast like a document schema would, or rejected."""

    def test_numeric_title_is_cast_to_string(self):
        post = Post.create(author='user-1', title=123)
        self.assertEqual(post.title, '123')

    def test_numeric_contents_is_cast_to_string(self):
        post = Post.create(author='user-1', title='T', contents=4.5)
        self.assertEqual(post.contents, '4.5')

    def test_structured_title_rejected(self):
        for value in ({'a': 1}, ['x'], True):
            with self.assertRaises(ValidationError) as ctx:
                Post.create(author='user-1', title=value)
            self.assertIn('title: Cast to string failed', str(ctx.exception))

    def test_patch_casts_and_rejects(self):
        post = Post.create(author='user-1', title='T')
        self.assertEqual(post.patched({'title': 7}).title, '7')
        with self.assertRaises(ValidationError):
            post.patched({'contents': ['not', 'text']})

    def test_validate_post_rejects_non_string_title(self):
        post = replace(Post.create(author='user-1', title='T'), title=123)
        with self.assertRaises(ValidationError):
            validate_post(post)

    def test_numeric_username_is_cast(self):
        self.assertEqual(User.create(username=42, password_hash='hash').username, '42')

    def test_structured_username_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            User.create(username={'$ne': None}, password_hash='hash')
        self.assertIn('username', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
