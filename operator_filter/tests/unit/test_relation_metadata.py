"""
Unit tests for relation metadata and the entity registry.
"""

import pytest
from django.test import SimpleTestCase

from operator_filter.metadata import (
    MANY_TO_MANY,
    MANY_TO_ONE,
    ONE_TO_MANY,
    ONE_TO_ONE,
    EntityRef,
    EntityRegistry,
    build_entity,
    build_relation_table,
)
from test_app.models import Author, Bookmark, Comment, Post, Tag

pytestmark = pytest.mark.unit


class TestBuildRelationTable(SimpleTestCase):
    def test_post_relations(self):
        relations = build_relation_table(Post)
        self.assertEqual(set(relations), {"author", "tags", "comments"})

    def test_forward_foreign_key(self):
        author = build_relation_table(Post)["author"]
        self.assertIs(author.related_model, Author)
        self.assertEqual(author.storage_name, "authors")
        self.assertEqual(author.join_key, "id")
        self.assertEqual(author.outer_key, "author_id")
        self.assertEqual(author.kind, MANY_TO_ONE)

    def test_reverse_foreign_key(self):
        comments = build_relation_table(Post)["comments"]
        self.assertIs(comments.related_model, Comment)
        self.assertEqual(comments.storage_name, "test_app_comment")
        self.assertEqual(comments.join_key, "post")
        self.assertEqual(comments.outer_key, "id")
        self.assertEqual(comments.kind, ONE_TO_MANY)

    def test_many_to_many_both_sides(self):
        tags = build_relation_table(Post)["tags"]
        self.assertIs(tags.related_model, Tag)
        self.assertEqual(tags.join_key, "posts")
        self.assertEqual(tags.outer_key, "pk")
        self.assertEqual(tags.kind, MANY_TO_MANY)

        posts = build_relation_table(Tag)["posts"]
        self.assertIs(posts.related_model, Post)
        self.assertEqual(posts.join_key, "tags")
        self.assertEqual(posts.kind, MANY_TO_MANY)

    def test_reverse_one_to_one(self):
        profile = build_relation_table(Author)["profile"]
        self.assertEqual(profile.join_key, "author")
        self.assertEqual(profile.kind, ONE_TO_ONE)

    def test_hidden_reverse_accessor_is_skipped(self):
        self.assertNotIn("+", build_relation_table(Post))
        self.assertIn("post", build_relation_table(Bookmark))

    def test_table_is_read_only(self):
        relations = build_relation_table(Post)
        with self.assertRaises(TypeError):
            relations["extra"] = relations["author"]


class TestEntityRegistry(SimpleTestCase):
    def setUp(self):
        self.registry = EntityRegistry()

    def test_register_is_idempotent(self):
        first = self.registry.register(Post)
        second = self.registry.register(Post)
        self.assertIs(first, second)
        self.assertEqual(len(self.registry), 1)

    def test_get_by_model_or_label(self):
        entity = self.registry.register(Author)
        self.assertIs(self.registry.get(Author), entity)
        self.assertIs(self.registry.get("test_app.author"), entity)
        self.assertIs(self.registry.get("test_app.Author"), entity)
        self.assertIn(Author, self.registry)
        self.assertIsNone(self.registry.get(Tag))

    def test_resolve(self):
        entity = build_entity(Tag)
        self.assertIs(self.registry.resolve(entity), entity)
        self.assertIsNone(self.registry.resolve(None))

        resolved = self.registry.resolve("test_app.Post")
        self.assertIsInstance(resolved, EntityRef)
        self.assertIs(resolved.model, Post)
        self.assertEqual(resolved.storage_name, "test_app_post")
        self.assertIn(Post, self.registry)

    def test_clear(self):
        self.registry.register(Post)
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)

    def test_entity_relation_lookup(self):
        entity = self.registry.register(Post)
        self.assertTrue(entity.has_relation("author"))
        self.assertFalse(entity.has_relation("publisher"))
        self.assertIsNone(entity.get_relation("publisher"))
