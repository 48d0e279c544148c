from .zxgraph import ET, VT, Edge, ZXGraph

__all__ = ['ET', 'VT', 'Edge', 'ZXGraph']
