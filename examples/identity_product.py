import os
import sys
import time

# Add the src directory to Python path to import local sparse_coo
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


from sparse_coo import SparseMatrix, DimensionError



def build_diagonal(n: int, value: float = 1.0) -> SparseMatrix:
    matrix = SparseMatrix()
    for i in range(1, n + 1):
        matrix.set_value_at_coordinate(i, i, value)
    return matrix


if __name__ == '__main__':
    n = 1000
    if len(sys.argv) > 1:
        n = int(sys.argv[1])

    print(f"=== Building two {n}x{n} diagonal matrices ===")
    st = time.time()
    matrix_a = build_diagonal(n)
    matrix_b = build_diagonal(n)
    print(f"  took: {time.time() - st:.2f} seconds")

    print(f"Multiplying")
    st = time.time()
    try:
        matrix_result = matrix_a.multiply(matrix_b)
    except DimensionError as e:
        print(f"matrix multiplication not possible: {e}")
        sys.exit(1)
    print(f"  took: {time.time() - st:.2f} seconds")

    if n <= 10:
        matrix_result.print_as_matrix()
        matrix_result.print_entries()
    print(f"Number of Matrix Elements: {matrix_result.get_number_of_points()}")
