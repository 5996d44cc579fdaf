import torch
from torch import Tensor


def solve_tridiagonal(
    diag: Tensor,
    upper: Tensor,
    lower: Tensor,
    rhs: Tensor,
) -> Tensor:
    """
    Solve a tridiagonal system Ax = b using the Thomas algorithm.

    The matrix A has the form:
        [d0  u0   0   0  ...  0   0 ]
        [l0  d1  u1   0  ...  0   0 ]
        [ 0  l1  d2  u2  ...  0   0 ]
        [        ...                ]
        [ 0   0   0   0  ... ln-2 dn-1]

    Parameters
    ----------
    diag : Tensor
        Main diagonal, shape (n,)
    upper : Tensor
        Upper diagonal, shape (n-1,)
    lower : Tensor
        Lower diagonal, shape (n-1,)
    rhs : Tensor
        Right-hand side, shape (*batch, n). May be complex.

    Returns
    -------
    Tensor
        Solution x, shape (*batch, n)

    Notes
    -----
    Forward elimination uses the pivot ``w = l[i-1] / b[i-1]`` where ``b``
    is the eliminated diagonal, then back-substitution. No pivoting is
    performed: the system must be diagonally dominant, which is the case of
    every cubic spline system over strictly increasing knots.
    """
    n = diag.shape[0]

    # rhs: (*batch, n) -> (n, *batch)
    rhs_t = rhs.movedim(-1, 0)

    if n == 1:
        return (rhs_t / diag[0]).movedim(0, -1)

    # Forward elimination
    b_list = [diag[0]]
    r_list = [rhs_t[0]]

    for i in range(1, n):
        w = lower[i - 1] / b_list[i - 1]
        b_list.append(diag[i] - w * upper[i - 1])
        r_list.append(rhs_t[i] - w * r_list[i - 1])

    # Back substitution, from back to front
    x_list = [None] * n
    x_list[n - 1] = r_list[n - 1] / b_list[n - 1]

    for i in range(n - 2, -1, -1):
        x_list[i] = (r_list[i] - upper[i] * x_list[i + 1]) / b_list[i]

    x = torch.stack(x_list, dim=0)

    # (n, *batch) -> (*batch, n)
    return x.movedim(0, -1)
