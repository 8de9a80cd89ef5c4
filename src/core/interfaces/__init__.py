"""Contratos (Protocol) entre el Core y los adaptadores.

- `credentials`: de dónde saca el resolver las keys de un personaje.
- `exporters`: renderizado de imágenes y callbacks de confirmación.
"""
