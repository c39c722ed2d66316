"""Registry of special forms for the stepwise macro pass.

Maps names to transformer functions that rewrite a whole, unreduced call
form. The stepper consults this table before ordinary application.
"""

from stepwise.evaluation.special_forms.define_form import define_form
from stepwise.evaluation.special_forms.lambda_form import lambda_form
from stepwise.evaluation.special_forms.if_form import if_form
from stepwise.evaluation.special_forms.apply_form import apply_form
from stepwise.evaluation.special_forms.list_form import list_form
from stepwise.evaluation.special_forms.defstruct_form import defstruct_form

SPECIAL_FORMS = {
    "define": define_form,
    "lambda": lambda_form,
    "if": if_form,
    "apply": apply_form,
    "list": list_form,
    "define-struct": defstruct_form,
}
