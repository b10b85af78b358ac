# -*- coding: utf-8 -*-
# Decoder explorer — single-level VHDL preview + tree decoder cost table
# 左：单级译码器（n、实体名、预览/保存 VHDL）
# 右：树形译码器开销表（f_max / b 列表、k 范围、导出 CSV）
#

from __future__ import annotations
import sys
from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QFont
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QLineEdit,
    QFileDialog, QMessageBox, QComboBox, QSpinBox, QPlainTextEdit, QDialog, QDialogButtonBox,
    QTableWidget, QTableWidgetItem, QGroupBox, QCheckBox
)

import decoder_cost
import gen_decoder

# 2^0 .. 2^16
N_CHOICES = [1 << i for i in range(17)]


def _parse_int_list(text: str) -> List[int]:
    return [int(t) for t in text.replace(",", " ").split()]


class MainWin(QMainWindow):
    def __init__(self, n=512):
        super().__init__()
        self.setWindowTitle("Decoder Explorer")
        self.resize(1200, 720)

        self.rows: List[decoder_cost.CostRow] = []
        self.k_values: List[int] = []

        # left: single-level decoder
        left = QGroupBox("单级译码器 (n : log2 n)"); llay = QVBoxLayout(left)
        self.cmbN = QComboBox()
        self.cmbN.addItems([str(v) for v in N_CHOICES])
        if n in N_CHOICES:
            self.cmbN.setCurrentIndex(N_CHOICES.index(n))
        self.edEntity = QLineEdit("")
        self.edEntity.setPlaceholderText("decoder_{n}")
        self.chkTrace = QCheckBox("预览时附带位向量序列")
        self.lblParams = QLabel(""); self.lblParams.setStyleSheet("color:#666")
        self.btnPreview = QPushButton("预览 VHDL")
        self.btnSave = QPushButton("保存 VHDL")

        llay.addWidget(QLabel("输出宽度 n：")); llay.addWidget(self.cmbN)
        llay.addWidget(QLabel("实体名（留空自动命名）：")); llay.addWidget(self.edEntity)
        llay.addWidget(self.chkTrace)
        llay.addWidget(self.lblParams)
        llay.addStretch()
        llay.addWidget(self.btnPreview); llay.addWidget(self.btnSave)

        # right: tree cost
        right = QGroupBox("树形译码器开销（晶体管数）"); rlay = QVBoxLayout(right)
        ctl = QHBoxLayout()
        self.edFmax = QLineEdit(", ".join(str(v) for v in decoder_cost.DEFAULT_F_MAX))
        self.edB = QLineEdit(", ".join(str(v) for v in decoder_cost.DEFAULT_B))
        self.spKmin = QSpinBox(); self.spKmin.setRange(0, 30); self.spKmin.setValue(decoder_cost.DEFAULT_K[0])
        self.spKmax = QSpinBox(); self.spKmax.setRange(0, 30); self.spKmax.setValue(decoder_cost.DEFAULT_K[-1])
        ctl.addWidget(QLabel("f_max：")); ctl.addWidget(self.edFmax, 2)
        ctl.addWidget(QLabel("b：")); ctl.addWidget(self.edB, 2)
        ctl.addWidget(QLabel("k：")); ctl.addWidget(self.spKmin); ctl.addWidget(QLabel("..")); ctl.addWidget(self.spKmax)
        self.btnCompute = QPushButton("计算")
        self.btnExportCSV = QPushButton("导出 CSV")
        ctl.addWidget(self.btnCompute); ctl.addWidget(self.btnExportCSV)

        self.table = QTableWidget(0, 0)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        rlay.addLayout(ctl)
        rlay.addWidget(self.table)

        center_layout = QHBoxLayout()
        center_layout.addWidget(left, 1)
        center_layout.addWidget(right, 4)
        cw = QWidget(); cw.setLayout(center_layout)
        self.setCentralWidget(cw)

        # events
        self.cmbN.currentIndexChanged.connect(self.update_params)
        self.edEntity.textChanged.connect(self.update_params)
        self.btnPreview.clicked.connect(self.on_preview_vhdl)
        self.btnSave.clicked.connect(self.on_save_vhdl)
        self.btnCompute.clicked.connect(self.on_compute)
        self.btnExportCSV.clicked.connect(self.on_export_csv)

        self.make_actions()
        self.update_params()
        self.on_compute()

    def make_actions(self):
        actPreview = QAction(self); actPreview.setShortcut("Ctrl+P"); actPreview.triggered.connect(self.on_preview_vhdl)
        actCompute = QAction(self); actCompute.setShortcut("F5"); actCompute.triggered.connect(self.on_compute)
        self.addAction(actPreview); self.addAction(actCompute)

    # ---------- single-level decoder ----------
    def current_config(self) -> gen_decoder.DecoderConfig:
        n = int(self.cmbN.currentText())
        return gen_decoder.DecoderConfig(n, self.edEntity.text().strip() or None)

    def update_params(self, *_):
        cfg = self.current_config()
        self.lblParams.setText(f"n = {cfg.n}\nlog_2(n) = {cfg.log2n}\n文件：{cfg.filename}")

    def generate_vhdl_text(self, trace_lines: Optional[List[str]] = None) -> str:
        cfg = self.current_config()
        trace = (lambda bv: trace_lines.append(str(bv))) if trace_lines is not None else None
        return "\n".join(gen_decoder.gen_decoder_lines(cfg, trace))

    def on_preview_vhdl(self):
        trace_lines: Optional[List[str]] = [] if self.chkTrace.isChecked() else None
        text = self.generate_vhdl_text(trace_lines)
        if trace_lines:
            text = text + "\n\n-- bit vectors (MSB first)\n" + "\n".join(f"-- {t}" for t in trace_lines)
        cfg = self.current_config()
        dlg = QDialog(self); dlg.setWindowTitle(f"VHDL 预览 - {cfg.filename}")
        lay = QVBoxLayout(dlg)
        edit = QPlainTextEdit(dlg); edit.setReadOnly(True); edit.setPlainText(text)
        edit.setFont(QFont("Monospace")); edit.setLineWrapMode(QPlainTextEdit.NoWrap)
        lay.addWidget(edit)
        btns = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Close, parent=dlg); lay.addWidget(btns)
        btns.accepted.connect(self.on_save_vhdl); btns.rejected.connect(dlg.close)
        dlg.resize(900, 600); dlg.exec()

    def on_save_vhdl(self):
        cfg = self.current_config()
        path, _ = QFileDialog.getSaveFileName(self, "保存 VHDL", cfg.filename, "VHDL (*.vhd *.vhdl)")
        if not path: return
        try:
            gen_decoder.write_text(path, self.generate_vhdl_text())
        except OSError as e:
            QMessageBox.critical(self, "保存失败", f"{e}")
            return
        QMessageBox.information(self, "OK", f"已保存：{path}")

    # ---------- tree cost ----------
    def on_compute(self):
        try:
            f_max_values = _parse_int_list(self.edFmax.text())
            b_values = _parse_int_list(self.edB.text())
        except ValueError:
            QMessageBox.warning(self, "输入无效", "f_max 与 b 需为逗号分隔的整数列表")
            return
        k_min, k_max = self.spKmin.value(), self.spKmax.value()
        if k_max < k_min:
            QMessageBox.warning(self, "输入无效", f"k 范围无效：{k_min}..{k_max}")
            return
        k_values = list(range(k_min, k_max + 1))
        try:
            rows = decoder_cost.sweep(k_values, f_max_values, b_values)
        except ValueError as e:
            QMessageBox.warning(self, "输入无效", f"{e}")
            return
        self.rows, self.k_values = rows, k_values
        self.fill_table()

    def fill_table(self):
        self.table.clear()
        self.table.setRowCount(len(self.rows))
        self.table.setColumnCount(len(self.k_values))
        self.table.setHorizontalHeaderLabels([f"k={k}" for k in self.k_values])
        self.table.setVerticalHeaderLabels([f"f_max={r.f_max}, b={r.b}" for r in self.rows])
        # 每个 k 下开销最小的 (f_max, b) 加粗
        col_best = [min(r.costs[ci] for r in self.rows) for ci in range(len(self.k_values))] if self.rows else []
        bold = QFont(); bold.setBold(True)
        for ri, r in enumerate(self.rows):
            for ci, c in enumerate(r.costs):
                it = QTableWidgetItem(str(c))
                it.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
                if c == col_best[ci]:
                    it.setFont(bold)
                    it.setToolTip("该 k 下最小")
                self.table.setItem(ri, ci, it)
        self.table.resizeColumnsToContents()

    def on_export_csv(self):
        if not self.rows:
            QMessageBox.information(self, "提示", "请先计算开销表"); return
        path, _ = QFileDialog.getSaveFileName(self, "导出 CSV", "tree_cost.csv", "CSV (*.csv)")
        if not path: return
        try:
            gen_decoder.write_text(path, decoder_cost.format_csv(self.rows, self.k_values))
        except OSError as e:
            QMessageBox.critical(self, "导出失败", f"{e}")
            return
        QMessageBox.information(self, "OK", f"已导出：{path}")


def main(n=512):
    app = QApplication(sys.argv)
    w = MainWin(n=n)
    w.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
