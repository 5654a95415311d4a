"""Output module - write generated text to disk."""

from ymlgen.output.writer import create_file_writer

__all__ = ["create_file_writer"]
