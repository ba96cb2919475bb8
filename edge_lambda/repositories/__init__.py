"""Repositories - 영속 계층."""
