"""
Row activity bounds under the current column bounds.
An infinite column bound makes the corresponding activity infinite.
"""


def maximal_activity(row, ucol, lcol) -> float:
    sup = 0.0
    for j, a_ij in row:
        if a_ij > 0:
            sup += float(a_ij) * float(ucol[j])
        elif a_ij < 0:
            sup += float(a_ij) * float(lcol[j])
    return sup


def minimal_activity(row, ucol, lcol) -> float:
    inf = 0.0
    for j, a_ij in row:
        if a_ij > 0:
            inf += float(a_ij) * float(lcol[j])
        elif a_ij < 0:
            inf += float(a_ij) * float(ucol[j])
    return inf
