"""Registry of control and definition natives.

These receive their arguments unevaluated and decide what to evaluate, which
is how conditionals, short-circuit logic, definitions, assignment and
property access work without any special casing in the evaluator. The
bootstrap binds every entry; the ones in OPERATOR_FORMS are also registered
as operators by the name they are bound under.
"""

from onion.types.symbol import Symbol
from onion.evaluation.special_forms.assign_form import assign_form
from onion.evaluation.special_forms.define_form import def_form, defop_form, defun_form
from onion.evaluation.special_forms.dot_form import dot_form, new_form
from onion.evaluation.special_forms.eval_form import eval_form, quote_form
from onion.evaluation.special_forms.if_form import default_form, if_form
from onion.evaluation.special_forms.lambda_form import fun_form
from onion.evaluation.special_forms.logic_forms import and_form, not_form, or_form
from onion.evaluation.special_forms.loop_forms import while_form
from onion.evaluation.special_forms.module_form import module_form
from onion.evaluation.special_forms.progn_form import do_form
from onion.evaluation.special_forms.struct_form import struct_form

SPECIAL_FORMS = {
    Symbol("if"): if_form,
    Symbol("do"): do_form,
    Symbol("and"): and_form,
    Symbol("or"): or_form,
    Symbol("not"): not_form,
    Symbol("while"): while_form,
    Symbol("quote"): quote_form,
    Symbol("eval"): eval_form,
    Symbol("defun"): defun_form,
    Symbol("defop"): defop_form,
    Symbol("struct"): struct_form,
    Symbol("module"): module_form,
}

OPERATOR_FORMS = {
    "def": def_form,
    "fun": fun_form,
    "=": assign_form,
    ".": dot_form,
    "new": new_form,
    "?": default_form,
}
