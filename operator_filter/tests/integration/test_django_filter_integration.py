"""
Integration tests for OperatorFilterField inside a django-filter FilterSet.
"""

import django_filters
import pytest
from django.test import TestCase

from operator_filter import (
    MalformedFilterError,
    UnknownRelationError,
    UnsupportedOperatorError,
)
from operator_filter.filters.django_filter import OperatorField, OperatorFilterField
from operator_filter.tests.fixtures import create_blog_data
from test_app.models import Post

pytestmark = pytest.mark.integration


class PostFilterSet(django_filters.FilterSet):
    age = OperatorFilterField()
    deleted_at = OperatorFilterField()
    author_country = OperatorFilterField(field_name="author__country")
    tag = OperatorFilterField(field_name="tags__name", distinct=True)
    publisher = OperatorFilterField(field_name="publisher__name")

    class Meta:
        model = Post
        fields = []


class TestOperatorField(TestCase):
    def test_compress(self):
        field = OperatorField(required=False)
        self.assertEqual(field.clean([">=", "18"]), {"operator": ">=", "value": "18"})
        self.assertEqual(field.clean(["null", ""]), {"operator": "null", "value": None})
        self.assertEqual(field.clean(["", "18"]), {"value": "18"})
        self.assertIsNone(field.clean(["", ""]))


class TestOperatorFilterSet(TestCase):
    @classmethod
    def setUpTestData(cls):
        create_blog_data(cls)

    def titles(self, data):
        filterset = PostFilterSet(data, queryset=Post.objects.all())
        return set(filterset.qs.values_list("title", flat=True))

    def test_unbound_filterset_returns_everything(self):
        filterset = PostFilterSet(queryset=Post.objects.all())
        self.assertEqual(filterset.qs.count(), 4)

    def test_empty_inputs_are_skipped(self):
        self.assertEqual(len(self.titles({"age_operator": "", "age_value": ""})), 4)

    def test_direct_column(self):
        titles = self.titles({"age_operator": "between", "age_value": "12,18"})
        self.assertEqual(titles, {"Django tips", "Flask notes"})

    def test_valueless_operator(self):
        titles = self.titles({"deleted_at_operator": "not_null", "deleted_at_value": ""})
        self.assertEqual(titles, {"Rust intro"})

    def test_relation_column(self):
        titles = self.titles({
            "author_country_operator": "in",
            "author_country_value": "US,CA",
            "age_operator": ">",
            "age_value": "12",
        })
        self.assertEqual(titles, {"Django tips"})

    def test_many_to_many_relation(self):
        filterset = PostFilterSet(
            {"tag_operator": "=", "tag_value": "web"}, queryset=Post.objects.all()
        )
        self.assertEqual(filterset.qs.count(), 2)
        self.assertEqual(
            set(filterset.qs.values_list("title", flat=True)), {"Django tips", "Untitled"}
        )

    def test_bad_operator_raises(self):
        filterset = PostFilterSet({"age_operator": "~", "age_value": "1"}, queryset=Post.objects.all())
        with self.assertRaises(UnsupportedOperatorError):
            filterset.qs

    def test_missing_operator_is_rejected(self):
        filterset = PostFilterSet({"age_value": "1"}, queryset=Post.objects.all())
        with self.assertRaisesMessage(MalformedFilterError, "to have an operator"):
            filterset.qs

    def test_unknown_relation_raises(self):
        filterset = PostFilterSet(
            {"publisher_operator": "=", "publisher_value": "ACME"}, queryset=Post.objects.all()
        )
        with self.assertRaises(UnknownRelationError):
            filterset.qs
