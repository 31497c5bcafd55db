"""Source snippets shared by the test modules."""

EMPTY = ""

TWO_SEQUENTIAL_LOOPS = """
let total = 0;
for (let i = 0; i < n; i++) { total += a[i]; }
for (let j = 0; j < n; j++) { total -= a[j]; }
"""

NESTED_LOOPS = """
for (let i = 0; i < n; i++) {
  for (let j = 0; j < n; j++) {
    grid += a[i] * a[j];
  }
}
"""

NESTED_LOOPS_WITH_SORT = NESTED_LOOPS + "result.sort();\n"

SORT_IN_LOOP = "for (let i = 0; i < n; i++) { array.sort(); }"

FACTORIAL_JS = """
function factorial(n) {
  if (n <= 1) return 1;
  return n * factorial(n - 1);
}
"""

FACTORIAL_PY = """
def factorial(n):
    if n <= 1:
        return 1
    return n * factorial(n - 1)
"""

BINARY_SEARCH_JS = (
    "while (low <= high) { mid = (low+high)/2; "
    "if (arr[mid] < target) low = mid + 1; else high = mid - 1; }"
)

BINARY_SEARCH_PY = """
def binary_search(arr, target):
    left, right = 0, len(arr)-1
    while left <= right:
        mid = (left+right)//2
        if arr[mid] == target:
            return mid
        elif arr[mid] < target:
            left = mid+1
        else:
            right = mid-1
    return -1
"""

HALVING_WHILE = "while (n > 1) { n = n / 2; steps++; }"

SHIFT_WHILE = "while (i > 0) { i >>= 1; bits++; }"

HALVING_FOR_HEADER = "for (let i = n; i > 0; i = Math.floor(i / 2)) total++;"

DEDUPE = """
const seen = new Set();
const out = [];
for (const x of xs) { if (!seen.has(x)) { seen.add(x); out.push(x); } }
"""

LOG_ONLY = "return Math.log2(n);"

LOOP_WITH_LOG = "for (let i = 0; i < n; i++) { total += Math.log(i); }"

LOOP_WITH_CONSOLE_LOG = "for (let i = 0; i < n; i++) { console.log(i); }"
