# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
HobbyScript: a small C-like scripting language with English and Chinese keyword vocabularies.
'''
