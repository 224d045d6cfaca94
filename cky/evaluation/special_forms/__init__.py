"""Registry of special forms for the cky evaluator.

Special forms are builtins whose arguments are passed unevaluated: each
handler receives the calling scope and the raw argument forms and decides
what to evaluate. They are installed in the global scope next to the ordinary
builtins, so no separate value kind is needed.
"""

from cky.evaluation.special_forms.if_form import if_form
from cky.evaluation.special_forms.define_form import define_form
from cky.evaluation.special_forms.lambda_form import lambda_form

SPECIAL_FORMS = {
    "if": if_form,
    "lambda": lambda_form,
    "define": define_form,
}
