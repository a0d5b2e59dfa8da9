"""
Example: Algebra Objects in Vec_Z2

Finds the algebra structures on 𝟙 ⊕ g and reports which are separable.
"""

from tensor_categories import QQ, algebra_structures, cyclic_group, graded_vector_spaces
from tensor_categories.algebras import is_separable


def main():
    C = graded_vector_spaces(QQ, cyclic_group(2))
    X = C[0] + C[1]

    print("=" * 60)
    print(f"Algebra structures on {X}")
    print("=" * 60)

    for A in algebra_structures(X):
        blocks = [list(M) for M in A.multiplication.m]
        print(f"  multiplication blocks {blocks}, separable: {is_separable(A)}")


if __name__ == "__main__":
    main()
