"""
Tensor Categories - Computer Algebra for Fusion Categories and their Centers

Structure-constant ring categories (fusion rules, associators, braidings),
centralizers and Drinfeld centers computed through relative induction, ring
subcategories of multifusion categories, arrow categories, and algebra
objects found by symbolic solving.
"""

__version__ = "0.1.0"

from .fields import Field, QQ, QQBar
from .groups import (
    BilinearForm,
    Cocycle,
    FiniteAbelianGroup,
    cyclic_3_cocycle,
    cyclic_group,
    nondegenerate_bilinear_form,
    trivial_3_cocycle,
)
from .category import (
    Category,
    End,
    Hom,
    HomSpace,
    Morphism,
    Object,
    compose,
    decompose_by_endomorphism_ring,
    direct_sum,
    express_in_basis,
    pentagon_holds,
    snake_holds,
    tensor_product,
)
from .ring_category import RingCategory, RingCategoryMorphism, RingCategoryObject
from .centralizer import CentralizerCategory, CentralizerObject, centralizer, drinfeld_center
from .subcategory import RingSubcategory, ring_subcategories
from .arrow_category import ArrowCategory, ArrowObject
from .examples import graded_vector_spaces, ising_category, tambara_yamagami, vector_spaces
from .solving import SolutionSet, guess_real_solutions_over_base_field, real_solutions_over_base_field, witness_set
from .algebras import (
    AlgebraObject,
    algebra_structures,
    commutative_algebra_structures,
    etale_algebra_structures,
    fix_unit,
    separable_algebra_structures,
)
from .constants import ComputationConfig, DEFAULT_CONFIG
from .exceptions import (
    CategoryError,
    DecompositionError,
    FieldError,
    NotRigidError,
    NotSemisimpleError,
    ParentMismatchError,
    WitnessSetError,
)

__all__ = [
    "Field",
    "QQ",
    "QQBar",
    "FiniteAbelianGroup",
    "cyclic_group",
    "BilinearForm",
    "nondegenerate_bilinear_form",
    "Cocycle",
    "trivial_3_cocycle",
    "cyclic_3_cocycle",
    "Category",
    "Object",
    "Morphism",
    "HomSpace",
    "Hom",
    "End",
    "compose",
    "tensor_product",
    "direct_sum",
    "express_in_basis",
    "decompose_by_endomorphism_ring",
    "pentagon_holds",
    "snake_holds",
    "RingCategory",
    "RingCategoryObject",
    "RingCategoryMorphism",
    "CentralizerCategory",
    "CentralizerObject",
    "centralizer",
    "drinfeld_center",
    "RingSubcategory",
    "ring_subcategories",
    "ArrowCategory",
    "ArrowObject",
    "vector_spaces",
    "graded_vector_spaces",
    "tambara_yamagami",
    "ising_category",
    "SolutionSet",
    "real_solutions_over_base_field",
    "guess_real_solutions_over_base_field",
    "witness_set",
    "AlgebraObject",
    "algebra_structures",
    "separable_algebra_structures",
    "commutative_algebra_structures",
    "etale_algebra_structures",
    "fix_unit",
    "ComputationConfig",
    "DEFAULT_CONFIG",
    "CategoryError",
    "ParentMismatchError",
    "NotRigidError",
    "NotSemisimpleError",
    "DecompositionError",
    "FieldError",
    "WitnessSetError",
]
