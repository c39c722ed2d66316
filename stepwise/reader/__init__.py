from stepwise.reader.parser import lex, TokenStream, tokenize, bake_token
