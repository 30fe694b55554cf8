from jsminify.stats import MinificationStats, StatsList


def format_text(stats: MinificationStats) -> str:
    return (
        f"Processed {stats.input_file}:\n"
        f"  Output: {stats.output_file}\n"
        f"  Reduction: {stats.reduction_percentage:.2f}% "
        f"({stats.original_size} → {stats.minified_size} bytes)\n"
        f"  Process time: {stats.process_time_ms:.2f} ms\n"
    )


def format_json(stats) -> str:
    """One stats object renders as a JSON object, a list as a JSON array."""
    if isinstance(stats, MinificationStats):
        return stats.model_dump_json(indent=2)
    return StatsList.dump_json(list(stats), indent=2).decode('utf-8')
