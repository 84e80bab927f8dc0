import matplotlib.pyplot as plt
import numpy as np


class Plotter:
    def plot_results(self, summary, progress=None, title="Cache Simulation", save_path=None, show=False):
        """Plot final hit/miss/eviction counts and, if given, the hit rate over the trace.

        progress: sequence of Progress snapshots from AccessSimulator.iter_progress
        Returns the matplotlib Figure.
        """
        progress = list(progress or [])
        ncols = 2 if progress else 1
        fig, axes = plt.subplots(1, ncols, figsize=(6 * ncols, 5), squeeze=False)

        ax = axes[0][0]
        labels = ['Hits', 'Misses', 'Evictions']
        values = [summary.hits, summary.misses, summary.evictions]
        bars = ax.bar(labels, values, color=['tab:green', 'tab:red', 'tab:orange'])
        for bar, val in zip(bars, values):
            ax.annotate(str(val), (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        ha='center', va='bottom')
        ax.set_ylabel('Count')
        ax.set_title(f"Hit rate {summary.hit_rate * 100:.2f}%")
        ax.grid(True, axis='y', alpha=0.3)

        if progress:
            ax = axes[0][1]
            records = np.array([p.records for p in progress])
            hit_rates = np.array([p.hit_rate for p in progress]) * 100
            evictions = np.array([p.evictions for p in progress])
            ax.plot(records, hit_rates, 'b-', linewidth=2, label='Hit rate (%)')
            ax.set_xlabel('Records')
            ax.set_ylabel('Hit Rate (%)')
            ax.set_ylim(0, 100)
            ax.grid(True, alpha=0.3)
            ax2 = ax.twinx()
            ax2.plot(records, evictions, 'r--', alpha=0.6, label='Evictions')
            ax2.set_ylabel('Evictions')
            lines = ax.get_lines() + ax2.get_lines()
            ax.legend(lines, [l.get_label() for l in lines], loc='lower right')

        fig.suptitle(title)
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path)
        if show:
            plt.show()
        else:
            plt.close(fig)
        return fig
