"""
JSON documents, seen as containers.

A document is a Free structure: each object or array is one more layer,
and each scalar is a leaf. Two documents match when they have the same
keys and the same array lengths all the way down, and the leaves then
pair up. The leaf values themselves do not affect the match.
"""
from typing import Any
from .prelude import Free, Pure, Wrapped

def from_json(value:Any) -> Free:
	if isinstance(value, dict):
		return Wrapped({k: from_json(v) for k, v in value.items()})
	if isinstance(value, list):
		return Wrapped([from_json(v) for v in value])
	return Pure(value)

def to_json(doc:Free) -> Any:
	""" Leaves which are pairs come out as two-element arrays, which is what JSON can say. """
	if isinstance(doc, Pure):
		return list(doc.value) if isinstance(doc.value, tuple) else doc.value
	layer = doc.layer
	if isinstance(layer, dict):
		return {k: to_json(v) for k, v in layer.items()}
	return [to_json(v) for v in layer]

def same_leaf(a, b) -> bool:
	""" As JSON sees it: `true` is not `1`, and `1` is not `1.0`. """
	return type(a) is type(b) and a == b
