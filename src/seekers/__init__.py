"""Seekers of Dao: a forum of posts, likes and sects."""
