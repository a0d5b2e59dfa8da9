"""
Demonstration: Drinfeld Centers and Relative Centralizers

Computes the simples, S-matrix and twists of the toric code Z(Vec_Z2), the
double semion model Z(Vec_Z2^ω), and the centralizer of the fermion inside
the Ising category.
"""

import logging

from tensor_categories import (
    QQBar,
    centralizer,
    cyclic_3_cocycle,
    cyclic_group,
    drinfeld_center,
    graded_vector_spaces,
    ising_category,
)


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def show_modular_data(Z):
    simples = Z.simples()
    print(f"\n  {len(simples)} simple objects")
    for s in simples:
        print(f"    • {s}  (dim {Z.dim(s)})")
    print("\n  S-matrix:")
    S = Z.smatrix()
    for i in range(S.rows):
        print("    " + "  ".join(f"{S[i, j]!s:>6}" for j in range(S.cols)))
    print("\n  Twists:", ", ".join(str(t) for t in Z.twists()))


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print_section("Toric code: Z(Vec_Z2)")
    show_modular_data(drinfeld_center(graded_vector_spaces(QQBar, cyclic_group(2))))

    print_section("Double semion: Z(Vec_Z2^ω)")
    C = graded_vector_spaces(QQBar, cyclic_group(2), cyclic_3_cocycle(2, QQBar))
    show_modular_data(drinfeld_center(C))

    print_section("Ising relative to ⟨χ⟩")
    I = ising_category()
    Z = centralizer(I, I[1])
    simples = Z.simples_by_induction(check_dimension=True)
    print(f"\n  {len(simples)} simple objects")
    for s in simples:
        print(f"    • {s}  (dim {Z.dim(s)})")
    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
