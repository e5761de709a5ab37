"""
Topic model quality metrics: perplexity and UMass coherence.

Both are computed from the document-term matrix the model was fit on;
neither mutates anything.
"""

import math
from typing import List, Sequence

import numpy as np

from policy_topics.features.vocabulary import DocumentTermMatrix


def perplexity(matrix: DocumentTermMatrix, beta: np.ndarray, gamma: np.ndarray) -> float:
    """
    Per-token perplexity of the corpus under the fitted distributions.

    exp(-sum_dw n_dw * log(sum_k gamma_dk * beta_kw) / N). Lower is better.
    """
    total_tokens = 0
    log_prob = 0.0
    for doc_index, row in enumerate(matrix.rows):
        if not row:
            continue
        term_indices = np.fromiter(row.keys(), dtype=np.int64)
        counts = np.fromiter(row.values(), dtype=np.float64)
        word_probs = gamma[doc_index] @ beta[:, term_indices]
        log_prob += float((counts * np.log(word_probs)).sum())
        total_tokens += int(counts.sum())

    if total_tokens == 0:
        return float("nan")
    return math.exp(-log_prob / total_tokens)


def document_frequencies(matrix: DocumentTermMatrix) -> List[set]:
    """Set of document indices containing each term index."""
    postings: List[set] = [set() for _ in range(matrix.n_terms)]
    for doc_index, row in enumerate(matrix.rows):
        for term_index in row:
            postings[term_index].add(doc_index)
    return postings


def umass_coherence(
    matrix: DocumentTermMatrix,
    top_term_indices: Sequence[Sequence[int]],
) -> List[float]:
    """
    UMass coherence of each topic's top terms (Mimno et al., 2011).

    For top terms v_1..v_n ranked by beta:
        sum_{m=2..n} sum_{l<m} log((D(v_m, v_l) + 1) / D(v_l))
    where D counts documents containing the term(s). Higher (closer to 0)
    is better.

    Args:
        matrix: Document-term matrix the model was fit on
        top_term_indices: For each topic, term indices ordered by beta

    Returns:
        One coherence score per topic
    """
    postings = document_frequencies(matrix)
    scores = []
    for indices in top_term_indices:
        score = 0.0
        for m in range(1, len(indices)):
            docs_m = postings[indices[m]]
            for l in range(m):
                docs_l = postings[indices[l]]
                if not docs_l:
                    continue
                co_occurrence = len(docs_m & docs_l)
                score += math.log((co_occurrence + 1) / len(docs_l))
        scores.append(score)
    return scores
