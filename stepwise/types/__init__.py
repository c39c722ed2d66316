from stepwise.types.symbol import Symbol
from stepwise.types.undefined import Undefined, UndefinedType
from stepwise.types.function import Function, NativeFunction, Lambda, LAMBDA_NAME
from stepwise.types.struct import Struct
from stepwise.types.quoted import Quoted
from stepwise.types.environment import Environment, resolve
from stepwise.types.macro_environment import MacroEnvironment, Rewritten, Deferred, Failed, MacroOutcome
