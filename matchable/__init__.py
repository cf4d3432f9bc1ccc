"""
Structural matching of parametric container types.

Two containers match when they have the same shape, regardless of
what elements they hold. See `capability` for the contract,
`generic` for getting instances by derivation, and `instances`
for the ones written by hand.
"""
from .ontology import Mismatch, LawViolation, DerivationError, Thunk, delay, force
from .capability import (
	Matchable, register, instance, lookup, instance_of, agreement,
	match_with, zip_match_with, zip_match, zipzip_match,
	fmap_recovered, eq_default, lift_eq_default,
)
from .generic import derive, generic_zip_match_with
from .prelude import (
	Identity, Const, Maybe, Nothing, Just, Either, Left, Right, Pair, NonEmpty,
	Compose, Free, Pure, Wrapped, Cofree,
)
from . import instances
