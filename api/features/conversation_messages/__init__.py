"""Conversation messages feature: record model, repository, library surface, HTTP routes.

Messages live in the `conversation_messages` table and are read and written with
plain parameterized SQL over the pooled DatabaseResource (no ORM entities).
"""
