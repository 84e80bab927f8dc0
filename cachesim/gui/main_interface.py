import sys
import os
from PyQt5.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout,
                           QHBoxLayout, QLabel, QPushButton, QProgressBar,
                           QFileDialog, QTabWidget, QSpinBox, QFormLayout, QMessageBox)
from PyQt5.QtCore import Qt, QThread, pyqtSignal
from PyQt5.QtGui import QPalette, QColor
import pyqtgraph as pg
from cachesim.config import CacheConfig, Config
from cachesim.core.cache import Cache
from cachesim.core.simulator import AccessSimulator
from cachesim.errors import CacheSimError


class CacheSimulationThread(QThread):
    """Thread to replay a trace against the cache and emit progress"""
    update_signal = pyqtSignal(dict)
    error_signal = pyqtSignal(str)
    finished_signal = pyqtSignal()

    def __init__(self, config, trace_data, interval=Config.progress_interval):
        super().__init__()
        self.config = config
        self.trace_data = trace_data
        self.interval = interval
        self.running = True

    def _records(self):
        for record in self.trace_data:
            if not self.running:
                break
            yield record

    def run(self):
        try:
            cache = Cache(CacheConfig(self.config['s'], self.config['E'], self.config['b']))
        except CacheSimError as e:
            self.error_signal.emit(str(e))
            self.finished_signal.emit()
            return

        simulator = AccessSimulator(cache)
        total = max(1, len(self.trace_data))
        for snapshot in simulator.iter_progress(self._records(), self.interval):
            metrics = {
                'progress': snapshot.records / total * 100,
                'records': snapshot.records,
                'hits': snapshot.hits,
                'misses': snapshot.misses,
                'evictions': snapshot.evictions,
                'hit_rate': snapshot.hit_rate * 100,
            }
            self.update_signal.emit(metrics)

        self.finished_signal.emit()

    def stop(self):
        self.running = False


class MainInterface(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("cachesim: LRU Cache Simulator")
        self.setGeometry(100, 100, 1200, 800)
        self.trace_data = None

        # Setup main widget and layout
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        layout = QVBoxLayout(main_widget)

        # Create tabs
        tabs = QTabWidget()
        layout.addWidget(tabs)

        config_widget = self._create_config_tab()
        tabs.addTab(config_widget, "Configuration")

        monitor_widget = self._create_monitor_tab()
        tabs.addTab(monitor_widget, "Performance Monitor")

        self.metrics_history = self._empty_history()

        self._set_dark_theme()

    @staticmethod
    def _empty_history():
        return {
            'records': [],
            'hit_rates': [],
            'evictions': [],
        }

    def _create_config_tab(self):
        widget = QWidget()
        layout = QFormLayout(widget)

        # Cache geometry
        defaults = CacheConfig.from_config(Config)
        self.set_bits = QSpinBox()
        self.set_bits.setRange(1, 20)
        self.set_bits.setValue(defaults.s)
        layout.addRow("Set index bits (s):", self.set_bits)

        self.ways = QSpinBox()
        self.ways.setRange(1, 64)
        self.ways.setValue(defaults.E)
        layout.addRow("Lines per set (E):", self.ways)

        self.block_bits = QSpinBox()
        self.block_bits.setRange(1, 16)
        self.block_bits.setValue(defaults.b)
        layout.addRow("Block offset bits (b):", self.block_bits)

        self.trace_label = QLabel("No trace loaded")
        layout.addRow("Trace:", self.trace_label)

        self.load_button = QPushButton("Load Trace File")
        self.load_button.clicked.connect(self._load_trace)
        layout.addRow(self.load_button)

        self.sample_button = QPushButton("Generate Sample Trace")
        self.sample_button.clicked.connect(self._generate_sample)
        layout.addRow(self.sample_button)

        self.start_button = QPushButton("Start Simulation")
        self.start_button.setEnabled(False)
        self.start_button.clicked.connect(self._start_simulation)
        layout.addRow(self.start_button)

        return widget

    def _create_monitor_tab(self):
        widget = QWidget()
        layout = QVBoxLayout(widget)

        # Progress section
        progress_widget = QWidget()
        progress_layout = QHBoxLayout(progress_widget)
        self.progress_bar = QProgressBar()
        progress_layout.addWidget(QLabel("Progress:"))
        progress_layout.addWidget(self.progress_bar)
        layout.addWidget(progress_widget)

        self.stats = self._create_stat_group("LRU Cache")
        layout.addWidget(self.stats)

        # Graphs section
        graphs_widget = QWidget()
        graphs_layout = QVBoxLayout(graphs_widget)

        self.hit_rate_plot = pg.PlotWidget(title="Cache Hit Rate")
        self.hit_rate_plot.setLabel('left', 'Hit Rate (%)')
        self.hit_rate_plot.setLabel('bottom', 'Records')
        self.hit_rate_plot.showGrid(x=True, y=True)
        self.hit_rate_curve = self.hit_rate_plot.plot(pen='g', name='Hit rate')
        graphs_layout.addWidget(self.hit_rate_plot)

        self.eviction_plot = pg.PlotWidget(title="Evictions")
        self.eviction_plot.setLabel('left', 'Evictions')
        self.eviction_plot.setLabel('bottom', 'Records')
        self.eviction_plot.showGrid(x=True, y=True)
        self.eviction_curve = self.eviction_plot.plot(pen='r', name='Evictions')
        graphs_layout.addWidget(self.eviction_plot)

        layout.addWidget(graphs_widget)
        return widget

    def _create_stat_group(self, title):
        group = QWidget()
        layout = QVBoxLayout(group)

        header = QLabel(title)
        header.setStyleSheet("font-weight: bold; font-size: 14px;")
        layout.addWidget(header)

        stats = {
            'Hits': '0',
            'Misses': '0',
            'Evictions': '0',
            'Hit Rate': '0%',
        }

        stat_widgets = {}
        for name, value in stats.items():
            stat_layout = QHBoxLayout()
            label = QLabel(f"{name}:")
            value_label = QLabel(value)
            value_label.setStyleSheet("font-family: monospace;")
            stat_layout.addWidget(label)
            stat_layout.addWidget(value_label)
            stat_layout.addStretch()
            layout.addLayout(stat_layout)
            stat_widgets[name] = value_label

        group.stats = stat_widgets
        return group

    def _set_dark_theme(self):
        app = QApplication.instance()
        app.setStyle('Fusion')
        palette = QPalette()
        palette.setColor(QPalette.Window, QColor(53, 53, 53))
        palette.setColor(QPalette.WindowText, Qt.white)
        palette.setColor(QPalette.Base, QColor(25, 25, 25))
        palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
        palette.setColor(QPalette.Text, Qt.white)
        palette.setColor(QPalette.Button, QColor(53, 53, 53))
        palette.setColor(QPalette.ButtonText, Qt.white)
        palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        palette.setColor(QPalette.HighlightedText, Qt.black)
        app.setPalette(palette)

    def set_trace(self, trace_data, name):
        self.trace_data = list(trace_data)
        self.trace_label.setText(f"{name} ({len(self.trace_data)} records)")
        self.start_button.setEnabled(bool(self.trace_data))

    def load_trace_file(self, filename):
        from cachesim.utils.trace_generator import load_trace
        self.set_trace(load_trace(filename), os.path.basename(filename))

    def _load_trace(self):
        filename, _ = QFileDialog.getOpenFileName(
            self,
            "Select Trace File",
            "",
            "Valgrind traces (*.trace);;All Files (*.*)"
        )

        if filename:
            try:
                self.load_trace_file(filename)
            except OSError as e:
                QMessageBox.warning(self, "Error", f"Failed to load trace: {str(e)}")

    def _generate_sample(self):
        # Synthetic trace for demonstration, kept in memory only
        from cachesim.utils.trace_generator import generate_sample_trace
        trace = generate_sample_trace(size=Config.synthetic_length,
                                      pattern_type=Config.synthetic_pattern,
                                      block_size=1 << self.block_bits.value(),
                                      seed=Config.synthetic_seed)
        self.set_trace(trace, f"synthetic {Config.synthetic_pattern}")

    def _start_simulation(self):
        config = {
            's': self.set_bits.value(),
            'E': self.ways.value(),
            'b': self.block_bits.value(),
        }

        self.metrics_history = self._empty_history()

        self.start_button.setEnabled(False)
        self.load_button.setEnabled(False)
        self.sample_button.setEnabled(False)

        self.sim_thread = CacheSimulationThread(config, self.trace_data)
        self.sim_thread.update_signal.connect(self._update_metrics)
        self.sim_thread.error_signal.connect(self._simulation_error)
        self.sim_thread.finished_signal.connect(self._simulation_finished)
        self.sim_thread.start()

    def _update_metrics(self, metrics):
        self.progress_bar.setValue(int(metrics['progress']))

        self.stats.stats['Hits'].setText(str(metrics['hits']))
        self.stats.stats['Misses'].setText(str(metrics['misses']))
        self.stats.stats['Evictions'].setText(str(metrics['evictions']))
        self.stats.stats['Hit Rate'].setText(f"{metrics['hit_rate']:.2f}%")

        self.metrics_history['records'].append(metrics['records'])
        self.metrics_history['hit_rates'].append(metrics['hit_rate'])
        self.metrics_history['evictions'].append(metrics['evictions'])

        self.hit_rate_curve.setData(
            self.metrics_history['records'],
            self.metrics_history['hit_rates']
        )
        self.eviction_curve.setData(
            self.metrics_history['records'],
            self.metrics_history['evictions']
        )

    def _simulation_error(self, message):
        QMessageBox.warning(self, "Configuration Error", message)

    def _simulation_finished(self):
        self.start_button.setEnabled(True)
        self.load_button.setEnabled(True)
        self.sample_button.setEnabled(True)


def main():
    app = QApplication(sys.argv)
    window = MainInterface()
    window.show()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
