from .sample_tree import SAMPLE_BUDGET
