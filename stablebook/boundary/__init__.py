"""Boundary adapters: relational store, image storage, legacy document store."""
