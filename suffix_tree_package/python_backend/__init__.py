'''Pure Python construction internals: node arena and Ukkonen engine.'''
