"""Agents that run weather lookups and watch orientation changes."""
