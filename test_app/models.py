from django.db import models


class Author(models.Model):
    name = models.CharField(max_length=100)
    country = models.CharField(max_length=2)

    class Meta:
        app_label = "test_app"
        db_table = "authors"


class Profile(models.Model):
    author = models.OneToOneField(
        Author, on_delete=models.CASCADE, related_name="profile"
    )
    website = models.URLField(blank=True)

    class Meta:
        app_label = "test_app"


class Tag(models.Model):
    name = models.CharField(max_length=50)

    class Meta:
        app_label = "test_app"


class Post(models.Model):
    title = models.CharField(max_length=200)
    age = models.PositiveIntegerField(default=0)
    author = models.ForeignKey(
        Author, on_delete=models.CASCADE, related_name="posts", null=True, blank=True
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name="posts")
    published_at = models.DateTimeField(null=True, blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "test_app"


class Comment(models.Model):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="comments")
    body = models.TextField()
    rating = models.PositiveSmallIntegerField(default=0)

    class Meta:
        app_label = "test_app"


class Bookmark(models.Model):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="+")
    label = models.CharField(max_length=50)

    class Meta:
        app_label = "test_app"
