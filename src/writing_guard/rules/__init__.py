"""Detector pipeline. Execution order is fixed here and nowhere else."""

from __future__ import annotations

from writing_guard.rules.base import GlobalMatchers, Rule, RuleContext
from writing_guard.rules.paragraphs import (
    rule_bold_spans,
    rule_em_dashes,
    rule_exclamations,
    rule_quotes,
    rule_rule_of_three,
)
from writing_guard.rules.phrases import (
    rule_buzzwords,
    rule_call_to_action,
    rule_confidence,
    rule_marketing,
    rule_puffery,
    rule_ranges,
    rule_templates,
    rule_transitions,
    rule_weasel,
)
from writing_guard.rules.sentences import (
    rule_broad_terms,
    rule_cadence,
    rule_connector_glut,
    rule_mid_sentence_question,
    rule_question_lead,
    rule_repetition,
    rule_sentence_length,
    rule_statistical_slop,
)
from writing_guard.rules.structure import (
    rule_bold_lead_bullets,
    rule_bullet_items,
    rule_document_patterns,
    rule_emoji_bullets,
    rule_headings,
    rule_min_code_blocks,
    rule_section_density,
    rule_triad_slop,
)

PIPELINE: list[Rule] = [
    rule_puffery,
    rule_weasel,
    rule_marketing,
    rule_buzzwords,
    rule_transitions,
    rule_templates,
    rule_ranges,
    rule_connector_glut,
    rule_sentence_length,
    rule_question_lead,
    rule_mid_sentence_question,
    rule_exclamations,
    rule_cadence,
    rule_broad_terms,
    rule_repetition,
    rule_call_to_action,
    rule_confidence,
    rule_statistical_slop,
    rule_rule_of_three,
    rule_em_dashes,
    rule_bold_spans,
    rule_headings,
    rule_bullet_items,
    rule_emoji_bullets,
    rule_bold_lead_bullets,
    rule_document_patterns,
    rule_min_code_blocks,
    rule_triad_slop,
    rule_section_density,
    rule_quotes,
]

__all__ = ["PIPELINE", "GlobalMatchers", "Rule", "RuleContext"]
