# -*- coding: utf-8 -*-
# decgen_allinone.py — 单文件 EXE：一键生成器（Tk） + 译码器浏览器（Qt）二合一
# 正常运行：打开 Tk 一键生成器
# 参数 --explorer：进入译码器浏览器模式（PySide6），支持 --n 指定输出宽度

import os, sys, traceback, subprocess, argparse

APP_TITLE = "DecGen 一键生成器（单文件版）"
DEFAULT_N = 512
COST_CSV = "tree_cost.csv"

def resource_dir():
    # 打包后：EXE 同目录；开发期：当前工作目录
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.getcwd()

# ----------------- 生成（与界面无关，可单测） -----------------
def generate_all(n, out_dir, with_cost=False):
    """Write the decoder (and optionally the tree cost CSV) into out_dir.

    Returns the list of written paths. ValueError for a bad n, OSError when
    out_dir cannot be written.
    """
    import gen_decoder
    import decoder_cost

    cfg = gen_decoder.DecoderConfig(n)
    written = []

    path = os.path.join(out_dir, cfg.filename)
    gen_decoder.write_text(path, "\n".join(gen_decoder.gen_decoder_lines(cfg)))
    written.append(path)

    if with_cost:
        k_values = decoder_cost.DEFAULT_K
        rows = decoder_cost.sweep(k_values)
        path = os.path.join(out_dir, COST_CSV)
        gen_decoder.write_text(path, decoder_cost.format_csv(rows, k_values))
        written.append(path)
    return written

# ----------------- 浏览器模式（Qt） -----------------
def run_explorer(n):
    import decoder_explorer_gui as deg
    deg.main(n=int(n) if n else DEFAULT_N)

def spawn_explorer(n):
    exe_path = sys.executable if getattr(sys, "frozen", False) else sys.argv[0]
    args = [exe_path, "--explorer", "--n", str(n)]
    if not getattr(sys, "frozen", False):
        args = [sys.executable] + args
    try:
        creationflags = 0x00000200 | 0x00000008 if os.name == "nt" else 0
        subprocess.Popen(args, cwd=os.path.dirname(exe_path) or None, creationflags=creationflags)
    except Exception as e:
        raise RuntimeError(f"无法启动译码器浏览器：{e}")

# ----------------- Tk 一键生成器 -----------------
def run_tk_main():
    import tkinter as tk
    from tkinter import ttk, filedialog, messagebox

    root = tk.Tk()
    root.title(APP_TITLE)
    root.geometry("580x300")

    frm = ttk.Frame(root, padding=12)
    frm.pack(fill="both", expand=True)

    status_text = tk.StringVar(value="请选择输出宽度 n（2 的幂），然后生成。")

    # n
    row = 0
    ttk.Label(frm, text="输出宽度 n：").grid(row=row, column=0, sticky="e", padx=4, pady=6)
    ent_N = ttk.Entry(frm, width=10)
    ent_N.insert(0, str(DEFAULT_N))
    ent_N.grid(row=row, column=1, sticky="w", padx=4, pady=6)

    # 开销表
    row += 1
    cost_var = tk.BooleanVar(value=False)
    ttk.Checkbutton(frm, text=f"同时导出树形译码器开销表（{COST_CSV}）", variable=cost_var).grid(
        row=row, column=1, sticky="w", padx=4, pady=6, columnspan=2)

    # 输出目录
    row += 1
    ttk.Label(frm, text="输出目录：").grid(row=row, column=0, sticky="e", padx=4, pady=6)
    out_var = tk.StringVar(value=resource_dir())
    ent_out = ttk.Entry(frm, textvariable=out_var, width=50)
    ent_out.grid(row=row, column=1, sticky="w", padx=4, pady=6, columnspan=2)

    def browse_out():
        path = filedialog.askdirectory(title="选择输出目录")
        if path:
            out_var.set(path)
    ttk.Button(frm, text="浏览...", command=browse_out).grid(row=row, column=3, sticky="w", padx=4, pady=6)

    # 生成逻辑
    def do_generate():
        try:
            n = int(ent_N.get())
        except ValueError:
            messagebox.showerror("非法宽度", "请输入正确的 n（整数）")
            return

        out_dir = out_var.get().strip() or resource_dir()
        try:
            written = generate_all(n, out_dir, with_cost=cost_var.get())
        except ValueError as e:
            messagebox.showerror("非法宽度", f"{e}")
            return
        except Exception as e:
            traceback.print_exc()
            messagebox.showerror("生成失败", f"{e}")
            return

        names = "\n".join(os.path.basename(p) for p in written)
        status_text.set(f"生成完成：已输出到 {out_dir}")
        messagebox.showinfo("完成", f"生成完成！\n输出目录：{out_dir}\n\n{names}")

    def do_spawn():
        try:
            spawn_explorer(ent_N.get())
        except RuntimeError as e:
            messagebox.showerror("启动失败", f"{e}")

    # 按钮行
    row += 1
    btn_gen = ttk.Button(frm, text="一键生成", width=18, command=do_generate)
    btn_gui = ttk.Button(frm, text="打开译码器浏览器", width=20, command=do_spawn)
    btn_exit = ttk.Button(frm, text="退出", width=8, command=root.destroy)
    btn_gen.grid(row=row, column=1, sticky="w", padx=4, pady=14)
    btn_gui.grid(row=row, column=2, sticky="w", padx=4, pady=14)
    btn_exit.grid(row=row, column=3, sticky="e", padx=4, pady=14)

    # 状态栏
    row += 1
    ttk.Label(frm, textvariable=status_text, foreground="#555").grid(row=row, column=0, columnspan=4, sticky="w", padx=4, pady=6)

    root.mainloop()

# ----------------- 入口 -----------------
def main():
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--explorer", action="store_true")
    parser.add_argument("--n", type=int, default=None)
    try:
        args, _ = parser.parse_known_args()
    except SystemExit:
        args = argparse.Namespace(explorer=False, n=None)

    if args.explorer:
        run_explorer(args.n or DEFAULT_N)
    else:
        run_tk_main()

if __name__ == "__main__":
    main()
