"""Plugins module - load generator functions from the generators directory."""

from ymlgen.plugins.resolver import create_generator_resolver, load_generator_module

__all__ = ["create_generator_resolver", "load_generator_module"]
