"""Favorites bounded context.

Owns favorite groups: which favorites belong to a group and how groups are
arranged into a parent/child forest, backed by the relational store.
"""
