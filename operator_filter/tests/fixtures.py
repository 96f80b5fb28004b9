"""
Shared data for operator filter tests.
"""

from datetime import datetime, timezone

from test_app.models import Author, Comment, Post, Profile, Tag


def create_blog_data(cls):
    """Populate ``cls`` (a TestCase) with authors, posts, tags and comments."""
    cls.ann = Author.objects.create(name="Ann", country="US")
    cls.bob = Author.objects.create(name="Bob", country="CA")
    cls.cleo = Author.objects.create(name="Cleo", country="FR")
    Profile.objects.create(author=cls.ann, website="https://ann.dev")

    cls.python = Tag.objects.create(name="python")
    cls.web = Tag.objects.create(name="web")

    cls.tips = Post.objects.create(
        title="Django tips",
        age=18,
        author=cls.ann,
        published_at=datetime(2024, 1, 10, tzinfo=timezone.utc),
    )
    cls.notes = Post.objects.create(title="Flask notes", age=12, author=cls.bob)
    cls.rust = Post.objects.create(
        title="Rust intro",
        age=30,
        author=cls.cleo,
        published_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        deleted_at=datetime(2024, 4, 1, tzinfo=timezone.utc),
    )
    cls.draft = Post.objects.create(title="Untitled", age=21)

    cls.tips.tags.add(cls.python, cls.web)
    cls.notes.tags.add(cls.python)
    cls.draft.tags.add(cls.web)

    Comment.objects.create(post=cls.tips, body="Great", rating=5)
    Comment.objects.create(post=cls.tips, body="meh", rating=2)
    Comment.objects.create(post=cls.notes, body="ok", rating=3)
