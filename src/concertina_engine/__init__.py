"""Concertina Engine — button-choice optimizer for ABC tunes.

Sub-package containing:
    notation         – ABC note spellings and enharmonic respelling
    button_catalog   – concertina layouts loaded from YAML
    key_signature    – K: field parsing into sharps and flats
    note_extractor   – offset-preserving note tokenizer
    normalizer       – key-signature-aware note spelling
    note_index       – note -> candidate buttons
    cost_model       – configurable button and finger-hop costs
    solver           – DP optimizer
    annotate         – orchestrates the pipeline and merges annotations
"""
