"""
VecSketch Canvas - Main drawing and editing surface.

Paints the scene, the selection handles and the in-progress polygon,
and forwards mouse events to the ShapeEditor.
"""

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QRectF, QPointF
from PyQt6.QtGui import (
    QPainter, QPen, QBrush, QColor, QPolygonF,
    QMouseEvent, QKeyEvent, QPaintEvent
)
from typing import Optional

from ..core.shapes import Shape, Rectangle, Ellipse, Line, Polygon
from ..graphics.editor import ShapeEditor, GestureState

_CURSORS = {
    "size_nwse": Qt.CursorShape.SizeFDiagCursor,
    "size_nesw": Qt.CursorShape.SizeBDiagCursor,
    "size_ns": Qt.CursorShape.SizeVerCursor,
    "size_we": Qt.CursorShape.SizeHorCursor,
}


class EditorCanvas(QWidget):
    """
    Widget view of a ShapeEditor.

    Holds no editing state of its own: every mouse event goes to the
    editor and every repaint reads the editor back.
    """

    def __init__(self, editor: ShapeEditor, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.editor = editor
        settings = editor.settings
        self.setFixedSize(int(settings.canvas_width), int(settings.canvas_height))
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        # Colors
        self._background_color = QColor(255, 255, 255)
        self._handle_fill = QColor(255, 255, 255)
        self._handle_stroke = QColor(0, 0, 0)
        self._preview_color = QColor(0, 120, 215)

        editor.scene_changed.connect(self.update)
        editor.selection_changed.connect(lambda _shape: self.update())

    # Painting

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), self._background_color)

        for shape in self.editor.scene:
            self._draw_shape(painter, shape)

        self._draw_polygon_preview(painter)
        self._draw_handles(painter)
        painter.end()

    def _draw_shape(self, painter: QPainter, shape: Shape):
        pen = QPen(QColor(shape.stroke_color), shape.stroke_width)
        painter.setPen(pen)
        if shape.has_fill:
            painter.setBrush(QBrush(QColor(shape.fill_color)))
        else:
            painter.setBrush(Qt.BrushStyle.NoBrush)

        if isinstance(shape, Rectangle):
            painter.drawRect(QRectF(shape.x, shape.y, shape.width, shape.height))
        elif isinstance(shape, Ellipse):
            painter.drawEllipse(QRectF(shape.x, shape.y, shape.width, shape.height))
        elif isinstance(shape, Line):
            painter.drawLine(QPointF(shape.x1, shape.y1), QPointF(shape.x2, shape.y2))
        elif isinstance(shape, Polygon):
            painter.drawPolygon(QPolygonF([QPointF(p.x, p.y) for p in shape.points]))

    def _draw_polygon_preview(self, painter: QPainter):
        if self.editor.state != GestureState.BUILDING_POLYGON:
            return
        points = [QPointF(p.x, p.y) for p in self.editor.polygon_points]
        preview = self.editor.preview_point
        if preview is not None:
            points.append(QPointF(preview.x, preview.y))

        pen = QPen(self._preview_color, self.editor.stroke_width, Qt.PenStyle.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(QPolygonF(points))

    def _draw_handles(self, painter: QPainter):
        painter.setPen(QPen(self._handle_stroke, 1))
        painter.setBrush(QBrush(self._handle_fill))
        for handle in self.editor.handles:
            painter.drawRect(QRectF(handle.x, handle.y, handle.size, handle.size))

    # Input

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        self.editor.pointer_down(pos.x(), pos.y())
        event.accept()

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        self.editor.pointer_down(pos.x(), pos.y(), click_count=2)
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        self.editor.pointer_move(pos.x(), pos.y())
        self._update_cursor(pos)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        self.editor.pointer_up(pos.x(), pos.y())
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            self.editor.delete_selected()
            return
        super().keyPressEvent(event)

    def _update_cursor(self, pos: QPointF):
        for handle in self.editor.handles:
            if QRectF(handle.x, handle.y, handle.size, handle.size).contains(pos):
                self.setCursor(_CURSORS.get(handle.cursor, Qt.CursorShape.ArrowCursor))
                return
        self.unsetCursor()
