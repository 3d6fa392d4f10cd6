from .classifier import ClassifiedLine, classify_line, clean_line, is_fence_delimiter
from .word_counter import count_prose_words, count_words
